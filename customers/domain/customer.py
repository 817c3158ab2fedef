"""
Customer domain entity.

A customer owns licenses and subscriptions. Account management itself
lives outside this service; only the fields the license core needs are kept.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email


@dataclass(frozen=True)
class Customer:
    """
    Customer domain entity.

    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    username: str
    email: Email
    chargebee_customer_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate customer entity."""
        if not self.username or len(self.username.strip()) == 0:
            raise ValueError("Username cannot be empty")
        if len(self.username) > 50:
            raise ValueError("Username too long")

    @classmethod
    def create(
        cls,
        username: str,
        email: str,
        chargebee_customer_id: Optional[str] = None,
        customer_id: Optional[uuid.UUID] = None,
    ) -> "Customer":
        """
        Create a new Customer entity.

        Args:
            username: Display name used in emails
            email: Email address
            chargebee_customer_id: Billing provider customer id
            customer_id: Optional UUID (generated if not provided)

        Returns:
            Customer entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=customer_id or uuid.uuid4(),
            username=username.strip(),
            email=Email(email),
            chargebee_customer_id=chargebee_customer_id,
            created_at=now,
            updated_at=now,
        )
