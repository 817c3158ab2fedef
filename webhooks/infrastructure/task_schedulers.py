"""
TaskScheduler implementations.

CeleryTaskScheduler hands processing to a Celery worker.
InlineTaskScheduler runs the dispatcher in the calling process; it is
meant for development and tests.
"""
import logging
import uuid

from asgiref.sync import sync_to_async

from webhooks.ports.task_scheduler import TaskScheduler

logger = logging.getLogger(__name__)


class CeleryTaskScheduler(TaskScheduler):
    """Enqueues webhooks.tasks.process_webhook_log."""

    async def schedule(self, log_id: uuid.UUID) -> None:
        from webhooks.tasks import process_webhook_log

        result = await sync_to_async(process_webhook_log.delay)(str(log_id))
        logger.debug("Webhook %s queued as task %s", log_id, result.id)


class InlineTaskScheduler(TaskScheduler):
    """Processes the log immediately with the given dispatcher."""

    def __init__(self, dispatcher: "WebhookDispatcher"):  # noqa: F821
        """Initialize scheduler with the dispatcher to run."""
        self.dispatcher = dispatcher

    async def schedule(self, log_id: uuid.UUID) -> None:
        await self.dispatcher.process(log_id)
