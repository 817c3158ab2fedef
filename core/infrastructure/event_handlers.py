"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and notifications.
"""

import logging

from activations.domain.events import ActivationRemoved, LicenseActivated
from core.domain.events import DomainEvent, EventBus, EventHandler
from customers.ports.customer_repository import CustomerRepository
from licenses.domain.events import (
    LicenseCreated,
    LicenseDeleted,
    LicenseExpired,
    LicenseReset,
    LicenseStatusChanged,
)
from licenses.ports.audit_log_repository import AuditLogRepository
from licenses.ports.license_repository import LicenseRepository
from notifications.application.notification_trigger import NotificationTrigger
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    LicenseCreated,
    LicenseStatusChanged,
    LicenseReset,
    LicenseDeleted,
    LicenseExpired,
    LicenseActivated,
    ActivationRemoved,
)

_BASE_FIELDS = {"event_id", "occurred_at", "aggregate_id", "event_type"}


def _event_changes(event: DomainEvent) -> dict:
    """Event-specific attributes as JSON-safe values."""
    changes = {}
    for name, value in vars(event).items():
        if name in _BASE_FIELDS:
            continue
        if value is None or isinstance(value, (bool, int, float, str)):
            changes[name] = value
        elif hasattr(value, "isoformat"):
            changes[name] = value.isoformat()
        else:
            changes[name] = str(value)
    changes["event_id"] = str(event.event_id)
    return changes


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every license and activation event to the audit log.
    """

    def __init__(self, audit_log_repository: AuditLogRepository):
        self.audit_log_repository = audit_log_repository

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
        await self.audit_log_repository.record(
            entity_type="license",
            entity_id=event.aggregate_id,
            action=event.event_type,
            changes=_event_changes(event),
        )


class LicenseActivatedEmailHandler(EventHandler):
    """
    Sends the license_activated email to the license owner.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        customer_repository: CustomerRepository,
        product_repository: ProductRepository,
        notification_trigger: NotificationTrigger,
    ):
        self.license_repository = license_repository
        self.customer_repository = customer_repository
        self.product_repository = product_repository
        self.notification_trigger = notification_trigger

    async def handle(self, event: LicenseActivated) -> None:
        license = await self.license_repository.find_by_id(event.license_id)
        if license is None:
            logger.warning("License %s gone before activation email", event.license_id)
            return

        customer = await self.customer_repository.find_by_id(license.customer_id)
        if customer is None:
            logger.warning("No customer for license %s, activation email skipped", license.id)
            return

        product = await self.product_repository.find_by_id(license.product_id)
        await self.notification_trigger.license_activated(
            to=str(customer.email),
            username=customer.username,
            product_name=product.name if product else "",
            license_key=license.key,
            domain=event.domain,
        )


def register_event_handlers(
    event_bus: EventBus,
    audit_handler: AuditLogEventHandler,
    activation_email_handler: LicenseActivatedEmailHandler,
) -> None:
    """Register all event handlers with the event bus."""
    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    event_bus.subscribe(LicenseActivated, activation_email_handler)

    logger.info("Event handlers registered")
