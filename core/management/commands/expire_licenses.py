"""
Django management command to mark expired licenses.

This command should be run periodically (e.g., via cron or scheduled task).
Celery beat runs the same sweep hourly.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from core.container import get_container
from licenses.application.commands.expire_licenses import ExpireLicensesCommand

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to mark active licenses past their expiry date as expired."""

    help = "Mark active licenses whose expiry date has passed as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        handler = get_container().expire_licenses_handler

        report = async_to_sync(handler.handle)(ExpireLicensesCommand(dry_run=dry_run))

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            self.stdout.write(f"Found {report.count} expired license(s)")
            for license_id in report.expired_ids[:10]:  # Show first 10
                self.stdout.write(f"  - License {license_id}")
            return

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully marked {report.count} license(s) as expired")
        )
