"""
IngestWebhookHandler.

Stores every inbound delivery before anything else happens to it.
"""
import logging
import re

from core.domain.exceptions import ValidationError
from core.metrics import webhooks_received_total
from webhooks.application.commands.ingest_webhook import IngestWebhookCommand
from webhooks.domain.webhook_log import WebhookLog
from webhooks.ports.task_scheduler import TaskScheduler
from webhooks.ports.webhook_log_repository import WebhookLogRepository

logger = logging.getLogger(__name__)

PROVIDER_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,49}$")


class IngestWebhookHandler:
    """Handler for IngestWebhookCommand."""

    def __init__(
        self,
        webhook_log_repository: WebhookLogRepository,
        task_scheduler: TaskScheduler,
    ):
        """Initialize handler with repository and scheduler."""
        self.webhook_log_repository = webhook_log_repository
        self.task_scheduler = task_scheduler

    async def handle(self, command: IngestWebhookCommand) -> WebhookLog:
        """
        Handle ingest webhook command.

        The log is persisted as pending before processing is scheduled.
        A scheduling failure leaves the log pending for a later retry and
        does not fail the acknowledgement.

        Args:
            command: IngestWebhookCommand

        Returns:
            The stored WebhookLog

        Raises:
            ValidationError: If the provider name is malformed
        """
        provider = (command.provider or "").strip().lower()
        if not PROVIDER_PATTERN.match(provider):
            logger.warning("Rejected webhook for invalid provider %r", command.provider)
            raise ValidationError(f"Invalid webhook provider: {command.provider!r}")

        webhook_log = await self.webhook_log_repository.save(
            WebhookLog.create(provider, command.payload)
        )
        webhooks_received_total.labels(
            provider=webhook_log.provider, event_type=webhook_log.event_type
        ).inc()
        logger.info(
            "Webhook received: %s - %s", webhook_log.provider, webhook_log.event_type,
            extra={"webhook_id": str(webhook_log.id)},
        )

        try:
            await self.task_scheduler.schedule(webhook_log.id)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Could not schedule webhook %s, left pending: %s", webhook_log.id, e,
                exc_info=True,
            )
        return webhook_log
