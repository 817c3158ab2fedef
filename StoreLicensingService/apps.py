"""
App configuration for Store Licensing Service.
"""

from django.apps import AppConfig


class StoreLicensingServiceConfig(AppConfig):
    """App configuration for StoreLicensingService."""

    name = "StoreLicensingService"
    verbose_name = "Store Licensing Service"

    def ready(self):
        """Called when Django starts."""
        import logging
        import os
        import sys

        from django.conf import settings

        logger = logging.getLogger(__name__)

        if not getattr(settings, "OTEL_ENABLED", True):
            return

        # Skip for management commands
        if len(sys.argv) > 1 and sys.argv[1] in [
            "migrate",
            "makemigrations",
            "collectstatic",
            "shell",
            "test",
            "check",
            "createsuperuser",
        ]:
            return

        # Django's reloader runs code twice; RUN_MAIN is "false" in the watcher
        if os.environ.get("RUN_MAIN") == "false":
            return

        if not hasattr(self, "_initialized"):
            try:
                from core.instrumentation import setup_opentelemetry

                logger.info("Setting up observability...")
                setup_opentelemetry()
                self._initialized = True
                logger.info("Observability setup complete")
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.warning("Failed to setup OpenTelemetry: %s", e)
