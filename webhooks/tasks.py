"""
Celery tasks for webhook processing.
"""
import logging
import uuid

from asgiref.sync import async_to_sync
from django.conf import settings

from StoreLicensingService.celery import app
from core.container import get_container
from webhooks.application.commands.purge_webhook_logs import PurgeWebhookLogsCommand

logger = logging.getLogger(__name__)


@app.task(
    bind=True,
    soft_time_limit=getattr(settings, "WEBHOOK_TASK_SOFT_TIME_LIMIT", 60),
    time_limit=getattr(settings, "WEBHOOK_TASK_TIME_LIMIT", 90),
    acks_late=True,
)
def process_webhook_log(self, webhook_log_id: str):
    """
    Celery task for webhook processing.

    The dispatcher records processor errors on the log itself and never
    raises, so the task is not retried.

    Args:
        webhook_log_id: WebhookLog UUID
    """
    dispatcher = get_container().dispatcher
    log = async_to_sync(dispatcher.process)(uuid.UUID(webhook_log_id))
    if log is None:
        logger.info(
            "Webhook %s was not processed by task %s", webhook_log_id, self.request.id
        )
        return None
    return log.status.value


@app.task
def purge_webhook_logs_task(days: int = None):
    """Delete webhook logs past the retention window."""
    if days is None:
        days = settings.WEBHOOK_LOG_RETENTION_DAYS
    result = async_to_sync(get_container().purge_webhook_logs_handler.handle)(
        PurgeWebhookLogsCommand(days=days)
    )
    logger.info("Webhook log retention removed %d log(s)", result.deleted_count)
    return result.deleted_count
