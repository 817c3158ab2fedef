"""
RetryWebhookHandler.
"""
import logging
from datetime import datetime, timezone

from core.domain.exceptions import InvalidStateError, WebhookLogNotFoundError
from core.domain.value_objects import WebhookStatus
from webhooks.application.commands.retry_webhook import RetryWebhookCommand
from webhooks.domain.webhook_log import WebhookLog
from webhooks.ports.task_scheduler import TaskScheduler
from webhooks.ports.webhook_log_repository import WebhookLogRepository

logger = logging.getLogger(__name__)


class RetryWebhookHandler:
    """Handler for RetryWebhookCommand."""

    def __init__(
        self,
        webhook_log_repository: WebhookLogRepository,
        task_scheduler: TaskScheduler,
        lease_seconds: int = 300,
    ):
        """Initialize handler with repository and scheduler."""
        self.webhook_log_repository = webhook_log_repository
        self.task_scheduler = task_scheduler
        self.lease_seconds = lease_seconds

    async def handle(self, command: RetryWebhookCommand) -> WebhookLog:
        """
        Handle retry webhook command.

        Args:
            command: RetryWebhookCommand

        Returns:
            The log as reset to pending

        Raises:
            WebhookLogNotFoundError: If the log does not exist
            InvalidStateError: If the log was processed or is being processed
        """
        reset = await self.webhook_log_repository.reset_for_retry(
            command.log_id, datetime.now(timezone.utc), self.lease_seconds
        )
        if reset is None:
            # Reloaded only to report why the reset did not apply
            webhook_log = await self.webhook_log_repository.find_by_id(command.log_id)
            if not webhook_log:
                raise WebhookLogNotFoundError("Webhook log not found")
            if webhook_log.status == WebhookStatus.PROCESSED:
                raise InvalidStateError("Webhook already processed successfully")
            raise InvalidStateError("Webhook is currently being processed")

        logger.info("Webhook %s queued for reprocessing", reset.id)

        await self.task_scheduler.schedule(reset.id)
        return reset
