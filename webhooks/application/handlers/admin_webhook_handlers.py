"""
Admin webhook handlers.

Listing, statistics, clearing and retention purge of webhook logs.
"""
import logging
from datetime import datetime, timedelta, timezone

from core.domain.exceptions import ValidationError
from core.domain.value_objects import WebhookStatus
from webhooks.application.commands.purge_webhook_logs import (
    ClearWebhookLogsCommand,
    PurgeWebhookLogsCommand,
)
from webhooks.application.dto.webhook_dto import (
    PurgeResultDTO,
    WebhookLogDTO,
    WebhookLogListDTO,
    WebhookStatsDTO,
)
from webhooks.application.queries.list_webhook_logs import (
    ListWebhookLogsQuery,
    WebhookStatsQuery,
)
from webhooks.ports.webhook_log_repository import WebhookLogRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


class ListWebhookLogsHandler:
    """Handler for ListWebhookLogsQuery."""

    def __init__(self, webhook_log_repository: WebhookLogRepository):
        self.webhook_log_repository = webhook_log_repository

    async def handle(self, query: ListWebhookLogsQuery) -> WebhookLogListDTO:
        """
        Handle list webhook logs query.

        Raises:
            ValidationError: If the status filter is not a webhook status
        """
        if query.status:
            try:
                WebhookStatus(query.status)
            except ValueError:
                raise ValidationError(f"Invalid status '{query.status}'") from None

        page = max(query.page, 1)
        limit = min(max(query.limit, 1), MAX_PAGE_SIZE)
        logs, total = await self.webhook_log_repository.list_logs(
            provider=query.provider,
            status=query.status,
            event_type=query.event_type,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return WebhookLogListDTO(
            logs=[WebhookLogDTO.from_entity(log) for log in logs],
            page=page,
            limit=limit,
            total=total,
        )


class WebhookStatsHandler:
    """Handler for WebhookStatsQuery."""

    def __init__(self, webhook_log_repository: WebhookLogRepository):
        self.webhook_log_repository = webhook_log_repository

    async def handle(self, query: WebhookStatsQuery) -> WebhookStatsDTO:
        now = query.current_time or datetime.now(timezone.utc)
        stats = await self.webhook_log_repository.stats(since=now - timedelta(hours=24))
        return WebhookStatsDTO(
            total=stats["total"],
            last_24_hours=stats["recent"],
            by_provider_and_status=stats["by_provider_and_status"],
        )


class ClearWebhookLogsHandler:
    """Handler for ClearWebhookLogsCommand."""

    def __init__(self, webhook_log_repository: WebhookLogRepository):
        self.webhook_log_repository = webhook_log_repository

    async def handle(self, command: ClearWebhookLogsCommand) -> PurgeResultDTO:
        deleted = await self.webhook_log_repository.clear()
        logger.info("All webhook logs cleared by admin (%d deleted)", deleted)
        return PurgeResultDTO(deleted_count=deleted)


class PurgeWebhookLogsHandler:
    """Handler for PurgeWebhookLogsCommand."""

    def __init__(self, webhook_log_repository: WebhookLogRepository):
        self.webhook_log_repository = webhook_log_repository

    async def handle(self, command: PurgeWebhookLogsCommand) -> PurgeResultDTO:
        """
        Handle purge webhook logs command.

        Raises:
            ValidationError: If days is not positive
        """
        if command.days < 1:
            raise ValidationError("Retention days must be at least 1")

        now = command.current_time or datetime.now(timezone.utc)
        cutoff = now - timedelta(days=command.days)
        deleted = await self.webhook_log_repository.delete_older_than(
            cutoff, dry_run=command.dry_run
        )
        if not command.dry_run:
            logger.info("Purged %d webhook log(s) older than %d days", deleted, command.days)
        return PurgeResultDTO(deleted_count=deleted, dry_run=command.dry_run)
