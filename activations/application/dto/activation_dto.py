"""
Activation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from activations.domain.activation import Activation


@dataclass
class ActivationDTO:
    """DTO for activation information."""

    id: uuid.UUID
    license_id: uuid.UUID
    domain: str
    ip_address: Optional[str]
    activated_at: datetime

    @classmethod
    def from_entity(cls, activation: Activation) -> "ActivationDTO":
        return cls(
            id=activation.id,
            license_id=activation.license_id,
            domain=str(activation.domain),
            ip_address=str(activation.ip_address) if activation.ip_address else None,
            activated_at=activation.activated_at,
        )


@dataclass
class ActivationListDTO:
    """DTO for the activations of a license with usage."""

    license_id: uuid.UUID
    max_activations: int
    activations: List[ActivationDTO]

    @property
    def usage(self) -> str:
        return f"{len(self.activations)}/{self.max_activations}"
