"""
Celery tasks for license maintenance.
"""
import logging

from asgiref.sync import async_to_sync

from StoreLicensingService.celery import app
from core.container import get_container
from licenses.application.commands.expire_licenses import ExpireLicensesCommand

logger = logging.getLogger(__name__)


@app.task
def expire_licenses_task():
    """Store the expired status on active licenses past their expiry date."""
    report = async_to_sync(get_container().expire_licenses_handler.handle)(
        ExpireLicensesCommand()
    )
    logger.info("License expiry sweep marked %d license(s)", report.count)
    return report.count
