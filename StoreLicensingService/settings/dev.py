"""
Development settings for StoreLicensingService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Database - PostgreSQL from docker-compose by default
# Override with environment variable DB_ENGINE=sqlite for SQLite
if os.environ.get("DB_ENGINE") == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

# Process webhooks in the web process unless a worker is configured
WEBHOOK_TASK_SCHEDULER = os.environ.get("WEBHOOK_TASK_SCHEDULER", "inline")

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
