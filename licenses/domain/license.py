"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import LicenseStatus


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Binds a key to a product/customer pair and caps how many
    activations may exist for it.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    customer_id: uuid.UUID
    key: str
    status: LicenseStatus
    max_activations: int
    activated_on: Optional[datetime]
    expires_on: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.product_id:
            raise ValueError("Product ID is required")
        if not self.customer_id:
            raise ValueError("Customer ID is required")
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")

    @classmethod
    def create(
        cls,
        product_id: uuid.UUID,
        customer_id: uuid.UUID,
        key: str,
        max_activations: int = 1,
        status: LicenseStatus = LicenseStatus.ACTIVE,
        expires_on: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new License entity.

        Args:
            product_id: Product UUID
            customer_id: Owning customer UUID
            key: Generated license key
            max_activations: Maximum number of activations
            status: Initial status
            expires_on: Optional expiration datetime
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            product_id=product_id,
            customer_id=customer_id,
            key=key,
            status=status,
            max_activations=max_activations,
            activated_on=None,
            expires_on=expires_on,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """Check whether the expiry date has passed."""
        if self.expires_on is None:
            return False
        check_time = current_time or datetime.now(timezone.utc)
        return check_time > self.expires_on

    def is_valid(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if license is currently valid.

        Args:
            current_time: Current time (defaults to now)

        Returns:
            True if license is active and not past its expiry date
        """
        if self.status != LicenseStatus.ACTIVE:
            return False
        return not self.is_expired(current_time)

    def effective_status(self, current_time: Optional[datetime] = None) -> LicenseStatus:
        """
        Status as seen by readers.

        An active license past its expiry date reads as expired even
        before the reconciliation job stores it.
        """
        if self.status == LicenseStatus.ACTIVE and self.is_expired(current_time):
            return LicenseStatus.EXPIRED
        return self.status

    def with_status(self, status: LicenseStatus) -> "License":
        """
        Create a new License instance with the given status.

        Any status may overwrite any other.
        """
        return replace(self, status=status, updated_at=datetime.now(timezone.utc))

    def activate(self) -> "License":
        """Create a new License instance with active status."""
        return self.with_status(LicenseStatus.ACTIVE)

    def mark_expired(self) -> "License":
        """Create a new License instance with expired status."""
        return self.with_status(LicenseStatus.EXPIRED)

    def stamp_activated(self, when: Optional[datetime] = None) -> "License":
        """
        Record the first activation time.

        Returns self unchanged when already stamped.
        """
        if self.activated_on is not None:
            return self
        now = when or datetime.now(timezone.utc)
        return replace(self, activated_on=now, updated_at=now)

    def clear_activation(self) -> "License":
        """Create a new License instance with activated_on cleared."""
        return replace(self, activated_on=None, updated_at=datetime.now(timezone.utc))

    def update(
        self,
        product_id: Optional[uuid.UUID] = None,
        customer_id: Optional[uuid.UUID] = None,
        expires_on: Optional[datetime] = None,
        max_activations: Optional[int] = None,
        clear_expiry: bool = False,
    ) -> "License":
        """
        Create a new License instance with the given fields replaced.

        Fields left as None keep their current value. The key never changes.
        """
        return replace(
            self,
            product_id=product_id or self.product_id,
            customer_id=customer_id or self.customer_id,
            expires_on=None if clear_expiry else (expires_on or self.expires_on),
            max_activations=(
                max_activations if max_activations is not None else self.max_activations
            ),
            updated_at=datetime.now(timezone.utc),
        )
