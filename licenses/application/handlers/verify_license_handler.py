"""
VerifyLicenseHandler.

Handler for the public license check used by installed products.
"""
import logging
from datetime import datetime, timezone

from core.metrics import license_verifications_total
from licenses.application.dto.license_dto import VerificationResultDTO
from licenses.application.queries.verify_license import VerifyLicenseQuery
from licenses.domain.license_key import is_well_formed
from licenses.domain.services import LicenseStatusPolicy
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


INVALID_RESULT = VerificationResultDTO(
    valid=False, status="invalid", message="Invalid license", found=False
)


class VerifyLicenseHandler:
    """Handler for VerifyLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, query: VerifyLicenseQuery) -> VerificationResultDTO:
        """
        Handle verify license query.

        Unknown and malformed keys both return the same invalid result.
        A known key reports its stored status, or expired when its expiry
        date has passed.

        Args:
            query: VerifyLicenseQuery

        Returns:
            VerificationResultDTO
        """
        key = (query.key or "").strip()
        if not is_well_formed(key):
            license_verifications_total.labels(result="invalid").inc()
            return INVALID_RESULT

        license = await self.license_repository.find_by_key(key)
        if not license:
            license_verifications_total.labels(result="invalid").inc()
            return INVALID_RESULT

        now = datetime.now(timezone.utc)
        valid = license.is_valid(now)
        license_verifications_total.labels(result="valid" if valid else "not_valid").inc()
        return VerificationResultDTO(
            valid=valid,
            status=license.effective_status(now).value,
            message=LicenseStatusPolicy.describe(license, now),
            found=True,
        )
