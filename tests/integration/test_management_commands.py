"""
Integration tests for maintenance commands and their Celery tasks.
"""

from datetime import datetime, timedelta, timezone
from io import StringIO

import pytest
from asgiref.sync import async_to_sync
from django.core.management import call_command
from django.core.management.base import CommandError

from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.tasks import expire_licenses_task
from webhooks.domain.webhook_log import WebhookLog
from webhooks.infrastructure.models import WebhookLog as WebhookLogModel
from webhooks.tasks import purge_webhook_logs_task


def _run(name, *args):
    out = StringIO()
    call_command(name, *args, stdout=out)
    return out.getvalue()


@pytest.fixture
def overdue_license(make_license):
    return make_license(expires_on=datetime.now(timezone.utc) - timedelta(days=1))


@pytest.fixture
def old_webhook_log(webhook_log_repository):
    log = async_to_sync(webhook_log_repository.save)(WebhookLog.create("chargebee", {}))
    WebhookLogModel.objects.filter(id=log.id).update(
        created_at=datetime.now(timezone.utc) - timedelta(days=45)
    )
    return log


@pytest.mark.django_db
@pytest.mark.integration
class TestExpireLicensesCommand:
    """Tests for the expire_licenses command."""

    def test_dry_run_reports_only(self, overdue_license, license_repository):
        output = _run("expire_licenses", "--dry-run")

        stored = async_to_sync(license_repository.find_by_id)(overdue_license.id)
        assert "DRY RUN" in output
        assert "Found 1 expired license(s)" in output
        assert str(overdue_license.id) in output
        assert stored.status == LicenseStatus.ACTIVE

    def test_marks_overdue_licenses(self, overdue_license, make_license, license_repository):
        current = make_license()

        output = _run("expire_licenses")

        assert "Successfully marked 1 license(s) as expired" in output
        expired = async_to_sync(license_repository.find_by_id)(overdue_license.id)
        untouched = async_to_sync(license_repository.find_by_id)(current.id)
        assert expired.status == LicenseStatus.EXPIRED
        assert untouched.status == LicenseStatus.ACTIVE

    def test_task_returns_count(self, overdue_license):
        assert expire_licenses_task() == 1
        assert expire_licenses_task() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestPurgeWebhookLogsCommand:
    """Tests for the purge_webhook_logs command."""

    def test_dry_run_counts(self, old_webhook_log):
        output = _run("purge_webhook_logs", "--days", "30", "--dry-run")

        assert "1 webhook log(s) older than 30 days would be deleted" in output
        assert WebhookLogModel.objects.filter(id=old_webhook_log.id).exists()

    def test_deletes_old_logs(self, old_webhook_log, webhook_log_repository):
        recent = async_to_sync(webhook_log_repository.save)(WebhookLog.create("custom", {}))

        output = _run("purge_webhook_logs", "--days", "30")

        assert "Deleted 1 webhook log(s) older than 30 days" in output
        assert list(WebhookLogModel.objects.values_list("id", flat=True)) == [recent.id]

    def test_invalid_window(self, db):
        with pytest.raises(CommandError):
            call_command("purge_webhook_logs", days=-1, stdout=StringIO())

    def test_zero_window_is_rejected_not_defaulted(self, old_webhook_log):
        with pytest.raises(CommandError, match="at least 1"):
            call_command("purge_webhook_logs", days=0, stdout=StringIO())
        with pytest.raises(ValidationError):
            purge_webhook_logs_task(days=0)

        assert WebhookLogModel.objects.filter(id=old_webhook_log.id).exists()

    def test_task_uses_retention_window(self, old_webhook_log, settings):
        settings.WEBHOOK_LOG_RETENTION_DAYS = 60

        assert purge_webhook_logs_task() == 0
        assert purge_webhook_logs_task(days=30) == 1
