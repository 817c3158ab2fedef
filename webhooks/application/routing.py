"""
Webhook routing table.

Maps (provider, event type) to the processor that handles it. Pairs not
listed here are acknowledged and marked processed without side effects.
"""
from typing import Dict, Tuple

from core.domain.events import EventBus
from core.domain.value_objects import SubscriptionStatus
from customers.ports.customer_repository import CustomerRepository
from customers.ports.subscription_repository import SubscriptionRepository
from licenses.ports.license_repository import LicenseRepository
from notifications.application.notification_trigger import NotificationTrigger
from products.ports.product_repository import ProductRepository
from webhooks.application.processors.base import CustomerResolver, WebhookProcessor
from webhooks.application.processors.chargebee import (
    PaymentFailedProcessor,
    PaymentSucceededProcessor,
    SubscriptionDeletedProcessor,
    SubscriptionUpsertProcessor,
)
from webhooks.application.processors.custom import (
    LicenseActivatedNotificationProcessor,
    SubscriptionRenewedProcessor,
)

RoutingTable = Dict[Tuple[str, str], WebhookProcessor]

CHARGEBEE = "chargebee"
CUSTOM = "custom"


def build_routing_table(
    customer_repository: CustomerRepository,
    subscription_repository: SubscriptionRepository,
    license_repository: LicenseRepository,
    product_repository: ProductRepository,
    notification_trigger: NotificationTrigger,
    event_bus: EventBus,
) -> RoutingTable:
    """
    Build the processor registry.

    Returns:
        Dict keyed by (provider, event_type)
    """
    resolver = CustomerResolver(customer_repository)
    return {
        (CHARGEBEE, "invoice.payment_succeeded"): PaymentSucceededProcessor(
            resolver, license_repository, product_repository, notification_trigger, event_bus
        ),
        (CHARGEBEE, "invoice.payment_failed"): PaymentFailedProcessor(
            resolver, notification_trigger
        ),
        (CHARGEBEE, "customer.subscription.created"): SubscriptionUpsertProcessor(
            resolver, subscription_repository, fixed_status=SubscriptionStatus.ACTIVE
        ),
        (CHARGEBEE, "customer.subscription.updated"): SubscriptionUpsertProcessor(
            resolver, subscription_repository
        ),
        (CHARGEBEE, "customer.subscription.deleted"): SubscriptionDeletedProcessor(
            resolver, subscription_repository, notification_trigger
        ),
        (CUSTOM, "user.subscription.renewed"): SubscriptionRenewedProcessor(
            resolver, subscription_repository, notification_trigger
        ),
        (CUSTOM, "license.activated"): LicenseActivatedNotificationProcessor(
            resolver, notification_trigger
        ),
    }
