"""
Activation domain entity.

This is the core domain entity representing a license activation.
It contains business logic and is independent of infrastructure.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import DomainName, IPAddress


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    Binds one domain to a license. Activations are created and deleted,
    never updated in place.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    domain: DomainName
    ip_address: Optional[IPAddress]
    activated_at: datetime

    def __post_init__(self):
        """Validate activation entity."""
        if not self.license_id:
            raise ValueError("License ID is required")
        if not self.domain:
            raise ValueError("Domain is required")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        domain: str,
        ip_address: Optional[str] = None,
        activation_id: Optional[uuid.UUID] = None,
    ) -> "Activation":
        """
        Create a new Activation entity.

        Args:
            license_id: License UUID
            domain: Domain the license is activated on
            ip_address: Optional client IP address
            activation_id: Optional UUID (generated if not provided)

        Returns:
            Activation entity instance

        Raises:
            ValueError: If the domain or IP address is malformed
        """
        return cls(
            id=activation_id or uuid.uuid4(),
            license_id=license_id,
            domain=DomainName(domain.strip().lower()),
            ip_address=IPAddress(ip_address.strip()) if ip_address else None,
            activated_at=datetime.now(timezone.utc),
        )
