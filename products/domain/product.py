"""
Product domain entity.

A product is the thing a license grants use of. It carries the default
activation limit copied onto new licenses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Product:
    """
    Product domain entity.

    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    name: str
    max_activations: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate product entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Product name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Product name too long")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")

    @classmethod
    def create(
        cls,
        name: str,
        max_activations: int = 1,
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """
        Create a new Product entity.

        Args:
            name: Product display name
            max_activations: Default activation limit for new licenses
            product_id: Optional UUID (generated if not provided)

        Returns:
            Product entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=product_id or uuid.uuid4(),
            name=name.strip(),
            max_activations=max_activations,
            created_at=now,
            updated_at=now,
        )
