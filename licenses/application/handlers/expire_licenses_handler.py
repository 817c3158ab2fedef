"""
ExpireLicensesHandler.

Stores the expired status on active licenses whose expiry date has passed.
Reads already treat such licenses as invalid; this makes the stored
status agree.
"""
import logging
from datetime import datetime, timezone

from core.domain.events import EventBus
from core.metrics import licenses_expired_total
from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.dto.license_dto import ExpiryReportDTO
from licenses.domain.events import LicenseExpired
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ExpireLicensesHandler:
    """Handler for ExpireLicensesCommand."""

    def __init__(self, license_repository: LicenseRepository, event_bus: EventBus):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.event_bus = event_bus

    async def handle(self, command: ExpireLicensesCommand) -> ExpiryReportDTO:
        now = command.current_time or datetime.now(timezone.utc)
        overdue = await self.license_repository.find_overdue(now)

        if command.dry_run:
            return ExpiryReportDTO(expired_ids=[lic.id for lic in overdue], dry_run=True)

        expired_ids = []
        for license in overdue:
            saved = await self.license_repository.save(license.mark_expired())
            expired_ids.append(saved.id)
            licenses_expired_total.inc()
            await self.event_bus.publish(
                LicenseExpired(license_id=saved.id, expires_on=saved.expires_on)
            )

        if expired_ids:
            logger.info("Marked %d license(s) expired", len(expired_ids))
        return ExpiryReportDTO(expired_ids=expired_ids, dry_run=False)
