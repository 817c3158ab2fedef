"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseCreated(DomainEvent):
    """Event raised when a license is created."""

    def __init__(
        self,
        license_id: uuid.UUID,
        customer_id: uuid.UUID,
        product_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseCreated event.

        Args:
            license_id: License UUID
            customer_id: Owning customer UUID
            product_id: Product UUID
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseCreated",
        )
        self.license_id = license_id
        self.customer_id = customer_id
        self.product_id = product_id


class LicenseStatusChanged(DomainEvent):
    """Event raised when a license status is overwritten."""

    def __init__(
        self,
        license_id: uuid.UUID,
        old_status: str,
        new_status: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseStatusChanged event.

        Args:
            license_id: License UUID
            old_status: Previous status value
            new_status: New status value
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseStatusChanged",
        )
        self.license_id = license_id
        self.old_status = old_status
        self.new_status = new_status


class LicenseReset(DomainEvent):
    """Event raised when all activations of a license are removed."""

    def __init__(
        self,
        license_id: uuid.UUID,
        deleted_count: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseReset",
        )
        self.license_id = license_id
        self.deleted_count = deleted_count


class LicenseDeleted(DomainEvent):
    """Event raised when a license is deleted."""

    def __init__(
        self,
        license_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseDeleted",
        )
        self.license_id = license_id


class LicenseExpired(DomainEvent):
    """Event raised when the reconciliation job stores an expired status."""

    def __init__(
        self,
        license_id: uuid.UUID,
        expires_on: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseExpired",
        )
        self.license_id = license_id
        self.expires_on = expires_on
