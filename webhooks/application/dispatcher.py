"""
WebhookDispatcher.

Claims a stored webhook log, routes it to its processor and records
the outcome on the log.
"""
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from core.metrics import webhook_processing_duration_seconds, webhooks_processed_total
from webhooks.application.routing import RoutingTable
from webhooks.domain.webhook_log import WebhookLog
from webhooks.ports.webhook_log_repository import WebhookLogRepository

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 2000


class WebhookDispatcher:
    """
    Processes one webhook log per call.

    process() never raises: processor errors end as a failed log,
    infrastructure errors are logged and leave the log pending for retry.
    No ordering is guaranteed between logs.
    """

    def __init__(
        self,
        webhook_log_repository: WebhookLogRepository,
        routing_table: RoutingTable,
        lease_seconds: int = 300,
    ):
        """Initialize dispatcher with repository and routing table."""
        self.webhook_log_repository = webhook_log_repository
        self.routing_table = routing_table
        self.lease_seconds = lease_seconds

    async def process(self, log_id: uuid.UUID) -> Optional[WebhookLog]:
        """
        Process a webhook log.

        Args:
            log_id: WebhookLog UUID

        Returns:
            The log after processing, or None if it could not be claimed
        """
        try:
            claimed = await self.webhook_log_repository.claim(
                log_id, datetime.now(timezone.utc), self.lease_seconds
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Could not claim webhook %s: %s", log_id, e, exc_info=True)
            return None

        if claimed is None:
            logger.info("Webhook %s not claimable (not pending or locked), skipping", log_id)
            return None

        started = time.monotonic()
        outcome = await self._run(claimed)
        webhook_processing_duration_seconds.labels(provider=claimed.provider).observe(
            time.monotonic() - started
        )
        webhooks_processed_total.labels(
            provider=claimed.provider, event_type=claimed.event_type, outcome=outcome
        ).inc()

        try:
            return await self.webhook_log_repository.find_by_id(claimed.id)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Could not reload webhook %s: %s", claimed.id, e, exc_info=True)
            return None

    async def _run(self, webhook_log: WebhookLog) -> str:
        """Route the log and store the outcome. Returns the metric outcome label."""
        log_extra = {
            "webhook_id": str(webhook_log.id),
            "provider": webhook_log.provider,
            "event_type": webhook_log.event_type,
        }
        logger.info(
            "Processing webhook: %s - %s", webhook_log.provider, webhook_log.event_type,
            extra=log_extra,
        )

        try:
            if webhook_log.provider_event_id and await (
                self.webhook_log_repository.has_processed_duplicate(
                    webhook_log.provider, webhook_log.provider_event_id, webhook_log.id
                )
            ):
                logger.info(
                    "Webhook %s duplicates processed event %s, skipping side effects",
                    webhook_log.id,
                    webhook_log.provider_event_id,
                    extra=log_extra,
                )
                await self.webhook_log_repository.mark_processed(webhook_log.id)
                return "duplicate"

            processor = self.routing_table.get((webhook_log.provider, webhook_log.event_type))
            if processor is None:
                logger.info(
                    "Unhandled %s event type: %s",
                    webhook_log.provider,
                    webhook_log.event_type,
                    extra=log_extra,
                )
                await self.webhook_log_repository.mark_processed(webhook_log.id)
                return "unhandled"

            await processor.process(webhook_log.payload)
        except Exception as e:  # pylint: disable=broad-exception-caught
            message = (str(e) or e.__class__.__name__)[:MAX_ERROR_LENGTH]
            logger.error(
                "Error processing webhook %s: %s", webhook_log.id, message,
                exc_info=True,
                extra=log_extra,
            )
            try:
                await self.webhook_log_repository.mark_failed(webhook_log.id, message)
            except Exception as store_error:  # pylint: disable=broad-exception-caught
                logger.error(
                    "Could not mark webhook %s failed: %s", webhook_log.id, store_error,
                    exc_info=True,
                )
            return "failed"

        try:
            await self.webhook_log_repository.mark_processed(webhook_log.id)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Could not mark webhook %s processed: %s", webhook_log.id, e, exc_info=True
            )
            return "failed"
        logger.info("Webhook processed successfully: %s", webhook_log.id, extra=log_extra)
        return "processed"
