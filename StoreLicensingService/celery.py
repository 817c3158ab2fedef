"""
Celery configuration for background tasks.

Used for webhook processing and the periodic maintenance jobs.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "StoreLicensingService.settings.base")

app = Celery("StoreLicensingService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "purge-webhook-logs": {
        "task": "webhooks.tasks.purge_webhook_logs_task",
        "schedule": crontab(hour=3, minute=0),
    },
    "expire-licenses": {
        "task": "licenses.tasks.expire_licenses_task",
        "schedule": crontab(minute=15),
    },
}
