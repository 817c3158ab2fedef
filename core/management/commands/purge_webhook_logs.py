"""
Django management command to delete old webhook logs.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.container import get_container
from core.domain.exceptions import ValidationError
from webhooks.application.commands.purge_webhook_logs import PurgeWebhookLogsCommand


class Command(BaseCommand):
    """Command to apply the webhook log retention window."""

    help = "Delete webhook logs older than the retention window"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Retention in days (default: WEBHOOK_LOG_RETENTION_DAYS)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only count the logs that would be deleted",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        days = options["days"]
        if days is None:
            days = settings.WEBHOOK_LOG_RETENTION_DAYS
        dry_run = options["dry_run"]
        handler = get_container().purge_webhook_logs_handler

        try:
            result = async_to_sync(handler.handle)(
                PurgeWebhookLogsCommand(days=days, dry_run=dry_run)
            )
        except ValidationError as e:
            raise CommandError(e.message) from e

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            self.stdout.write(
                f"{result.deleted_count} webhook log(s) older than {days} days would be deleted"
            )
            return

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(
                f"Deleted {result.deleted_count} webhook log(s) older than {days} days"
            )
        )
