"""
Integration tests for webhook retry against concurrent processing runs.

The repositories below let a competing run act at the last moment before
the retry writes, which is the worst interleaving for a reset.
"""

from datetime import datetime, timezone

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import InvalidStateError
from core.domain.value_objects import WebhookStatus
from webhooks.application.commands.retry_webhook import RetryWebhookCommand
from webhooks.application.handlers.retry_webhook_handler import RetryWebhookHandler
from webhooks.domain.webhook_log import WebhookLog
from webhooks.infrastructure.models import WebhookLog as WebhookLogModel
from webhooks.infrastructure.repositories.django_webhook_log_repository import (
    DjangoWebhookLogRepository,
)


class CompletingRunRepository(DjangoWebhookLogRepository):
    """A processing run finishes just before the retry resets the log."""

    async def reset_for_retry(self, log_id, current_time, lease_seconds):
        await self.mark_processed(log_id)
        return await super().reset_for_retry(log_id, current_time, lease_seconds)


class StartingRunRepository(DjangoWebhookLogRepository):
    """A processing run claims the log just before the retry resets it."""

    claimed = None

    async def reset_for_retry(self, log_id, current_time, lease_seconds):
        self.claimed = await self.claim(log_id, current_time, lease_seconds)
        return await super().reset_for_retry(log_id, current_time, lease_seconds)


def _failed_log(repository):
    log = async_to_sync(repository.save)(
        WebhookLog.create("chargebee", {"type": "invoice.payment_failed"})
    )
    async_to_sync(repository.mark_failed)(log.id, "boom")
    return log


@pytest.mark.django_db
@pytest.mark.integration
class TestRetryAgainstRunningProcessing:
    """Retry must not undo or share the work of a concurrent run."""

    def test_run_completing_first_keeps_log_processed(self, task_scheduler):
        repository = CompletingRunRepository()
        log = _failed_log(repository)
        handler = RetryWebhookHandler(repository, task_scheduler)

        with pytest.raises(InvalidStateError, match="already processed"):
            async_to_sync(handler.handle)(RetryWebhookCommand(log_id=log.id))

        assert WebhookLogModel.objects.get(id=log.id).status == WebhookStatus.PROCESSED.value
        assert task_scheduler.scheduled == []

    def test_run_claiming_first_keeps_its_lease(self, task_scheduler):
        repository = StartingRunRepository()
        log = async_to_sync(repository.save)(WebhookLog.create("chargebee", {}))
        handler = RetryWebhookHandler(repository, task_scheduler)

        with pytest.raises(InvalidStateError, match="currently being processed"):
            async_to_sync(handler.handle)(RetryWebhookCommand(log_id=log.id))

        second_claim = async_to_sync(repository.claim)(log.id, datetime.now(timezone.utc), 300)
        assert repository.claimed is not None
        assert second_claim is None
        assert task_scheduler.scheduled == []
