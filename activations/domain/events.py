"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseActivated(DomainEvent):
    """Event raised when a license is activated on a domain."""

    def __init__(
        self,
        activation_id: uuid.UUID,
        license_id: uuid.UUID,
        domain: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            activation_id: Activation UUID
            license_id: License UUID
            domain: Activated domain
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseActivated",
        )
        self.activation_id = activation_id
        self.license_id = license_id
        self.domain = domain


class ActivationRemoved(DomainEvent):
    """Event raised when an activation is deleted."""

    def __init__(
        self,
        activation_id: uuid.UUID,
        license_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize ActivationRemoved event.

        Args:
            activation_id: Activation UUID
            license_id: License UUID
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="ActivationRemoved",
        )
        self.activation_id = activation_id
        self.license_id = license_id
