"""
Service container.

Builds the repositories, the event bus, the notification trigger and every
application handler once per process and wires them together.
"""
import logging
from functools import lru_cache

from django.conf import settings

from activations.application.handlers.activation_handlers import (
    AddActivationHandler,
    ListActivationsHandler,
    RemoveActivationHandler,
)
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.infrastructure.event_handlers import (
    AuditLogEventHandler,
    LicenseActivatedEmailHandler,
    register_event_handlers,
)
from core.infrastructure.events import InMemoryEventBus
from customers.infrastructure.repositories.django_customer_repository import (
    DjangoCustomerRepository,
)
from customers.infrastructure.repositories.django_subscription_repository import (
    DjangoSubscriptionRepository,
)
from licenses.application.handlers.admin_license_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    ResetActivationsHandler,
    UpdateLicenseHandler,
    UpdateLicenseStatusHandler,
)
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    ListCustomerLicensesHandler,
    ListLicensesHandler,
)
from licenses.application.handlers.verify_license_handler import VerifyLicenseHandler
from licenses.infrastructure.repositories.django_audit_log_repository import (
    DjangoAuditLogRepository,
)
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from notifications.application.notification_trigger import NotificationTrigger
from notifications.infrastructure.django_email_sender import DjangoEmailSender
from products.infrastructure.repositories.django_product_repository import (
    DjangoProductRepository,
)
from webhooks.application.dispatcher import WebhookDispatcher
from webhooks.application.handlers.admin_webhook_handlers import (
    ClearWebhookLogsHandler,
    ListWebhookLogsHandler,
    PurgeWebhookLogsHandler,
    WebhookStatsHandler,
)
from webhooks.application.handlers.ingest_webhook_handler import IngestWebhookHandler
from webhooks.application.handlers.retry_webhook_handler import RetryWebhookHandler
from webhooks.application.routing import build_routing_table
from webhooks.infrastructure.repositories.django_webhook_log_repository import (
    DjangoWebhookLogRepository,
)
from webhooks.infrastructure.task_schedulers import CeleryTaskScheduler, InlineTaskScheduler

logger = logging.getLogger(__name__)


class Container:
    """Holds one instance of every service."""

    def __init__(self, scheduler: str = "celery", lease_seconds: int = 300):
        # Repositories
        self.customer_repository = DjangoCustomerRepository()
        self.subscription_repository = DjangoSubscriptionRepository()
        self.product_repository = DjangoProductRepository()
        self.license_repository = DjangoLicenseRepository()
        self.activation_repository = DjangoActivationRepository()
        self.audit_log_repository = DjangoAuditLogRepository()
        self.webhook_log_repository = DjangoWebhookLogRepository()

        self.event_bus = InMemoryEventBus()
        self.email_sender = DjangoEmailSender()
        self.notification_trigger = NotificationTrigger(self.email_sender)

        register_event_handlers(
            self.event_bus,
            AuditLogEventHandler(self.audit_log_repository),
            LicenseActivatedEmailHandler(
                self.license_repository,
                self.customer_repository,
                self.product_repository,
                self.notification_trigger,
            ),
        )

        # Webhooks
        self.routing_table = build_routing_table(
            customer_repository=self.customer_repository,
            subscription_repository=self.subscription_repository,
            license_repository=self.license_repository,
            product_repository=self.product_repository,
            notification_trigger=self.notification_trigger,
            event_bus=self.event_bus,
        )
        self.dispatcher = WebhookDispatcher(
            self.webhook_log_repository, self.routing_table, lease_seconds=lease_seconds
        )
        if scheduler == "inline":
            self.task_scheduler = InlineTaskScheduler(self.dispatcher)
        elif scheduler == "celery":
            self.task_scheduler = CeleryTaskScheduler()
        else:
            raise ValueError(f"Unknown WEBHOOK_TASK_SCHEDULER: {scheduler!r}")

        self.ingest_webhook_handler = IngestWebhookHandler(
            self.webhook_log_repository, self.task_scheduler
        )
        self.retry_webhook_handler = RetryWebhookHandler(
            self.webhook_log_repository, self.task_scheduler, lease_seconds=lease_seconds
        )
        self.list_webhook_logs_handler = ListWebhookLogsHandler(self.webhook_log_repository)
        self.webhook_stats_handler = WebhookStatsHandler(self.webhook_log_repository)
        self.clear_webhook_logs_handler = ClearWebhookLogsHandler(self.webhook_log_repository)
        self.purge_webhook_logs_handler = PurgeWebhookLogsHandler(self.webhook_log_repository)

        # Licenses
        self.create_license_handler = CreateLicenseHandler(
            self.license_repository,
            self.product_repository,
            self.customer_repository,
            self.event_bus,
        )
        self.update_license_handler = UpdateLicenseHandler(
            self.license_repository,
            self.activation_repository,
            self.product_repository,
            self.customer_repository,
        )
        self.delete_license_handler = DeleteLicenseHandler(self.license_repository, self.event_bus)
        self.update_license_status_handler = UpdateLicenseStatusHandler(
            self.license_repository, self.activation_repository, self.event_bus
        )
        self.reset_activations_handler = ResetActivationsHandler(
            self.license_repository, self.activation_repository, self.event_bus
        )
        self.get_license_handler = GetLicenseHandler(
            self.license_repository, self.activation_repository
        )
        self.list_licenses_handler = ListLicensesHandler(self.license_repository)
        self.list_customer_licenses_handler = ListCustomerLicensesHandler(
            self.license_repository
        )
        self.verify_license_handler = VerifyLicenseHandler(self.license_repository)
        self.expire_licenses_handler = ExpireLicensesHandler(
            self.license_repository, self.event_bus
        )

        # Activations
        self.add_activation_handler = AddActivationHandler(
            self.activation_repository, self.event_bus
        )
        self.remove_activation_handler = RemoveActivationHandler(
            self.license_repository, self.activation_repository, self.event_bus
        )
        self.list_activations_handler = ListActivationsHandler(
            self.license_repository, self.activation_repository
        )


@lru_cache(maxsize=1)
def get_container() -> Container:
    """Process-wide container built from settings."""
    container = Container(
        scheduler=getattr(settings, "WEBHOOK_TASK_SCHEDULER", "celery"),
        lease_seconds=getattr(settings, "WEBHOOK_PROCESSING_LEASE_SECONDS", 300),
    )
    logger.info("Service container built (scheduler=%s)", container.task_scheduler.__class__.__name__)
    return container


def reset_container() -> None:
    """Drop the cached container so the next call rebuilds it from settings."""
    get_container.cache_clear()
