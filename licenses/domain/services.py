"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License


class LicenseStatusPolicy:
    """Domain service for license status input and reporting."""

    @staticmethod
    def parse_status(value: Optional[str]) -> LicenseStatus:
        """
        Parse a status string supplied by an admin.

        Args:
            value: Raw status value

        Returns:
            LicenseStatus enum member

        Raises:
            ValidationError: If value is not one of the four statuses
        """
        try:
            return LicenseStatus(value)
        except ValueError:
            allowed = ", ".join(status.value for status in LicenseStatus)
            raise ValidationError(
                f"Invalid status '{value}'. Must be one of: {allowed}"
            ) from None

    @staticmethod
    def describe(license: License, current_time: Optional[datetime] = None) -> str:
        """
        Human readable verification message.

        Args:
            license: License entity
            current_time: Evaluation time

        Returns:
            Message shown to the verifying client
        """
        if license.is_valid(current_time):
            return "License is valid"
        status = license.effective_status(current_time)
        if status == LicenseStatus.EXPIRED:
            return "License has expired"
        if status == LicenseStatus.REVOKED:
            return "License has been revoked"
        if status == LicenseStatus.PENDING:
            return "License is pending activation"
        return "License is not valid"
