"""
Pytest configuration and shared fixtures.

Unit tests use the in-memory fakes below; integration tests use the
Django repositories against the test database.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync

from activations.domain.services import ActivationPolicy
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.container import reset_container
from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import LicenseStatus, WebhookStatus
from core.infrastructure.events import InMemoryEventBus
from customers.domain.customer import Customer
from customers.infrastructure.repositories.django_customer_repository import (
    DjangoCustomerRepository,
)
from customers.infrastructure.repositories.django_subscription_repository import (
    DjangoSubscriptionRepository,
)
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.domain.email import EmailResult
from products.domain.product import Product
from products.infrastructure.repositories.django_product_repository import (
    DjangoProductRepository,
)
from webhooks.infrastructure.repositories.django_webhook_log_repository import (
    DjangoWebhookLogRepository,
)


# In-memory fakes


class InMemoryLicenseRepository:
    """Dict-backed stand-in for LicenseRepository."""

    def __init__(self):
        self.licenses = {}

    async def save(self, license):
        self.licenses[license.id] = license
        return license

    async def find_by_id(self, license_id, customer_id=None):
        license = self.licenses.get(license_id)
        if license and customer_id and license.customer_id != customer_id:
            return None
        return license

    async def find_by_key(self, key):
        return next((lic for lic in self.licenses.values() if lic.key == key), None)

    async def key_exists(self, key):
        return await self.find_by_key(key) is not None

    async def delete(self, license_id):
        return self.licenses.pop(license_id, None) is not None

    async def find_pending_by_customer(self, customer_id):
        return [
            lic
            for lic in self.licenses.values()
            if lic.customer_id == customer_id and lic.status == LicenseStatus.PENDING
        ]

    async def find_overdue(self, current_time):
        return [
            lic
            for lic in self.licenses.values()
            if lic.status == LicenseStatus.ACTIVE and lic.is_expired(current_time)
        ]


class InMemoryActivationRepository:
    """List-backed stand-in for ActivationRepository sharing a license store."""

    def __init__(self, license_repository):
        self.license_repository = license_repository
        self.activations = {}

    async def add_within_quota(self, activation, customer_id=None):
        license = await self.license_repository.find_by_id(activation.license_id, customer_id)
        if license is None:
            raise LicenseNotFoundError("License not found or access denied")
        current = await self.find_by_license(license.id)
        ActivationPolicy.ensure_capacity(license.max_activations, len(current))
        ActivationPolicy.ensure_new_domain(
            str(activation.domain),
            any(str(a.domain) == str(activation.domain) for a in current),
        )
        self.activations[activation.id] = activation
        if license.activated_on is None:
            await self.license_repository.save(license.stamp_activated(activation.activated_at))
        return activation

    async def find_by_id(self, activation_id):
        return self.activations.get(activation_id)

    async def find_by_license(self, license_id):
        return [a for a in self.activations.values() if a.license_id == license_id]

    async def count_by_license(self, license_id):
        return len(await self.find_by_license(license_id))

    async def delete(self, activation_id, license_id):
        activation = self.activations.get(activation_id)
        if activation is None or activation.license_id != license_id:
            return False
        del self.activations[activation_id]
        return True

    async def reset_license(self, license_id):
        doomed = [a.id for a in self.activations.values() if a.license_id == license_id]
        for activation_id in doomed:
            del self.activations[activation_id]
        license = await self.license_repository.find_by_id(license_id)
        if license:
            await self.license_repository.save(license.clear_activation())
        return len(doomed)


class InMemoryWebhookLogRepository:
    """Dict-backed stand-in for WebhookLogRepository."""

    def __init__(self):
        self.logs = {}

    async def save(self, webhook_log):
        self.logs[webhook_log.id] = webhook_log
        return webhook_log

    async def find_by_id(self, log_id):
        return self.logs.get(log_id)

    async def claim(self, log_id, current_time, lease_seconds):
        log = self.logs.get(log_id)
        if log is None or log.status != WebhookStatus.PENDING:
            return None
        if log.is_locked(current_time, lease_seconds):
            return None
        claimed = replace(log, processing_started_at=current_time, attempts=log.attempts + 1)
        self.logs[log_id] = claimed
        return claimed

    async def reset_for_retry(self, log_id, current_time, lease_seconds):
        log = self.logs.get(log_id)
        if log is None or log.status == WebhookStatus.PROCESSED:
            return None
        if log.is_locked(current_time, lease_seconds):
            return None
        self.logs[log_id] = log.reset_for_retry()
        return self.logs[log_id]

    async def mark_processed(self, log_id):
        self.logs[log_id] = replace(
            self.logs[log_id],
            status=WebhookStatus.PROCESSED,
            error_message=None,
            processing_started_at=None,
            processed_at=datetime.now(timezone.utc),
        )

    async def mark_failed(self, log_id, error_message):
        self.logs[log_id] = replace(
            self.logs[log_id],
            status=WebhookStatus.FAILED,
            error_message=error_message,
            processing_started_at=None,
        )

    async def has_processed_duplicate(self, provider, provider_event_id, exclude_id):
        return any(
            log.provider == provider
            and log.provider_event_id == provider_event_id
            and log.status == WebhookStatus.PROCESSED
            and log.id != exclude_id
            for log in self.logs.values()
        )


class RecordingEmailSender:
    """EmailSender that records every send instead of delivering."""

    def __init__(self):
        self.sent = []

    async def send(self, template_key, to, variables):
        self.sent.append((template_key, to, variables))
        return EmailResult.ok(template_key, to)


class BrokenEmailSender:
    """EmailSender whose transport is down."""

    async def send(self, template_key, to, variables):
        raise ConnectionError("SMTP connection refused")


class RecordingTaskScheduler:
    """TaskScheduler that records scheduled log ids."""

    def __init__(self, fail=False):
        self.scheduled = []
        self.fail = fail

    async def schedule(self, log_id):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.scheduled.append(log_id)


@pytest.fixture
def memory_license_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def memory_activation_repository(memory_license_repository):
    """Fixture for an in-memory ActivationRepository."""
    return InMemoryActivationRepository(memory_license_repository)


@pytest.fixture
def memory_webhook_log_repository():
    """Fixture for an in-memory WebhookLogRepository."""
    return InMemoryWebhookLogRepository()


@pytest.fixture
def email_sender():
    """Fixture for a recording EmailSender."""
    return RecordingEmailSender()


@pytest.fixture
def broken_email_sender():
    """Fixture for an EmailSender that always raises."""
    return BrokenEmailSender()


@pytest.fixture
def task_scheduler():
    """Fixture for a recording TaskScheduler."""
    return RecordingTaskScheduler()


@pytest.fixture
def failing_task_scheduler():
    """Fixture for a TaskScheduler whose broker is down."""
    return RecordingTaskScheduler(fail=True)


@pytest.fixture
def event_bus():
    """Fixture for a fresh event bus."""
    return InMemoryEventBus()


@pytest.fixture
def sample_license():
    """Fixture for an active License entity with two activations allowed."""
    return License.create(
        product_id=uuid.uuid4(),
        customer_id=uuid.uuid4(),
        key="A" * 32,
        max_activations=2,
    )


# Django repositories


@pytest.fixture
def customer_repository():
    """Fixture for CustomerRepository."""
    return DjangoCustomerRepository()


@pytest.fixture
def subscription_repository():
    """Fixture for SubscriptionRepository."""
    return DjangoSubscriptionRepository()


@pytest.fixture
def product_repository():
    """Fixture for ProductRepository."""
    return DjangoProductRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def webhook_log_repository():
    """Fixture for WebhookLogRepository."""
    return DjangoWebhookLogRepository()


@pytest.fixture(autouse=True)
def fresh_container():
    """Rebuild the service container for every test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def db_customer(db, customer_repository):
    """Fixture for a Customer saved in database."""
    unique_id = uuid.uuid4().hex[:8]
    customer = Customer.create(
        username=f"buyer{unique_id}",
        email=f"buyer{unique_id}@example.com",
        chargebee_customer_id=f"cb_{unique_id}",
    )
    return async_to_sync(customer_repository.save)(customer)


@pytest.fixture
def db_product(db, product_repository):
    """Fixture for a Product saved in database."""
    return async_to_sync(product_repository.save)(
        Product.create(name="Theme Pro", max_activations=2)
    )


@pytest.fixture
def make_license(db, license_repository, db_customer, db_product):
    """Factory fixture saving licenses for the default customer and product."""

    def _make(**overrides):
        values = {
            "product_id": db_product.id,
            "customer_id": db_customer.id,
            "key": uuid.uuid4().hex.upper(),
            "max_activations": 2,
            "expires_on": datetime.now(timezone.utc) + timedelta(days=365),
        }
        values.update(overrides)
        return async_to_sync(license_repository.save)(License.create(**values))

    return _make


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
