"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from activations.application.dto.activation_dto import ActivationDTO
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    key: str
    product_id: uuid.UUID
    customer_id: uuid.UUID
    status: str
    max_activations: int
    activation_count: int
    activated_on: Optional[datetime]
    expires_on: Optional[datetime]
    is_valid: bool
    created_at: datetime
    updated_at: datetime
    activations: List[ActivationDTO] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls,
        license: License,
        activation_count: int = 0,
        activations: Optional[List[ActivationDTO]] = None,
    ) -> "LicenseDTO":
        return cls(
            id=license.id,
            key=license.key,
            product_id=license.product_id,
            customer_id=license.customer_id,
            status=license.status.value,
            max_activations=license.max_activations,
            activation_count=activation_count,
            activated_on=license.activated_on,
            expires_on=license.expires_on,
            is_valid=license.is_valid(),
            created_at=license.created_at,
            updated_at=license.updated_at,
            activations=activations or [],
        )

    @property
    def usage(self) -> str:
        return f"{self.activation_count}/{self.max_activations}"

    @property
    def usage_percent(self) -> float:
        return round(self.activation_count / self.max_activations * 100, 2)


@dataclass
class LicenseListDTO:
    """DTO for a page of licenses - admin listing."""

    licenses: List[LicenseDTO]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@dataclass
class VerificationResultDTO:
    """
    DTO for license verification.

    Unknown and malformed keys produce the same invalid result.
    """

    valid: bool
    status: str
    message: str
    found: bool


@dataclass
class ResetResultDTO:
    """DTO for activation reset."""

    license_id: uuid.UUID
    deleted_count: int


@dataclass
class ExpiryReportDTO:
    """DTO for the expiry reconciliation sweep."""

    expired_ids: List[uuid.UUID]
    dry_run: bool

    @property
    def count(self) -> int:
        return len(self.expired_ids)
