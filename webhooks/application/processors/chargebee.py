"""
Chargebee event processors.
"""
import logging
from typing import Any, Dict, Optional

from core.domain.events import EventBus
from core.domain.value_objects import SubscriptionStatus
from customers.domain.customer import Customer
from customers.domain.subscription import Subscription
from customers.ports.subscription_repository import SubscriptionRepository
from licenses.domain.events import LicenseStatusChanged
from licenses.ports.license_repository import LicenseRepository
from notifications.application.notification_trigger import NotificationTrigger
from products.ports.product_repository import ProductRepository
from webhooks.application.processors.base import (
    CustomerResolver,
    WebhookProcessor,
    amount,
    plan_name,
)
from webhooks.domain.services import dig, event_content, parse_timestamp

logger = logging.getLogger(__name__)

# Chargebee subscription statuses
SUBSCRIPTION_STATUS_MAP = {
    "active": SubscriptionStatus.ACTIVE,
    "in_trial": SubscriptionStatus.ACTIVE,
    "non_renewing": SubscriptionStatus.ACTIVE,
    "future": SubscriptionStatus.PENDING,
    "paused": SubscriptionStatus.PENDING,
    "cancelled": SubscriptionStatus.CANCELLED,
    "expired": SubscriptionStatus.EXPIRED,
}


class PaymentSucceededProcessor(WebhookProcessor):
    """
    invoice.payment_succeeded

    Activates the customer's pending licenses and sends the purchase email.
    """

    def __init__(
        self,
        customer_resolver: CustomerResolver,
        license_repository: LicenseRepository,
        product_repository: ProductRepository,
        notification_trigger: NotificationTrigger,
        event_bus: EventBus,
    ):
        self.customer_resolver = customer_resolver
        self.license_repository = license_repository
        self.product_repository = product_repository
        self.notification_trigger = notification_trigger
        self.event_bus = event_bus

    async def process(self, payload: Dict[str, Any]) -> None:
        customer = await self.customer_resolver.resolve(payload)
        if customer is None:
            return

        activated = []
        for license in await self.license_repository.find_pending_by_customer(customer.id):
            saved = await self.license_repository.save(license.activate())
            activated.append(saved)
            await self.event_bus.publish(
                LicenseStatusChanged(
                    license_id=saved.id,
                    old_status=license.status.value,
                    new_status=saved.status.value,
                )
            )
        if activated:
            logger.info("Activated %d pending license(s) for customer %s", len(activated), customer.id)

        product_name = dig(
            event_content(payload), "subscription.plan_id", "plan.name", "product.name"
        )
        if product_name is None and activated:
            product = await self.product_repository.find_by_id(activated[0].product_id)
            product_name = product.name if product else None

        await self.notification_trigger.purchase(
            to=str(customer.email),
            username=customer.username,
            product_name=product_name or plan_name(payload),
            amount=amount(payload),
            license_key=", ".join(license.key for license in activated),
        )


class PaymentFailedProcessor(WebhookProcessor):
    """invoice.payment_failed - sends the payment failed email."""

    def __init__(
        self,
        customer_resolver: CustomerResolver,
        notification_trigger: NotificationTrigger,
    ):
        self.customer_resolver = customer_resolver
        self.notification_trigger = notification_trigger

    async def process(self, payload: Dict[str, Any]) -> None:
        customer = await self.customer_resolver.resolve(payload)
        if customer is None:
            return

        await self.notification_trigger.payment_failed(
            to=str(customer.email),
            username=customer.username,
            amount=amount(payload),
            invoice_number=dig(event_content(payload), "invoice.id", "invoice_number"),
        )


class SubscriptionUpsertProcessor(WebhookProcessor):
    """
    customer.subscription.created / customer.subscription.updated

    Creates or updates the Subscription named by the event.
    """

    def __init__(
        self,
        customer_resolver: CustomerResolver,
        subscription_repository: SubscriptionRepository,
        fixed_status: Optional[SubscriptionStatus] = None,
    ):
        """
        Args:
            fixed_status: Status to store regardless of the payload; when
                None the provider's status is mapped, and an absent or
                unknown one keeps the stored status
        """
        self.customer_resolver = customer_resolver
        self.subscription_repository = subscription_repository
        self.fixed_status = fixed_status

    def _status(self, payload: Dict[str, Any]) -> Optional[SubscriptionStatus]:
        if self.fixed_status is not None:
            return self.fixed_status
        provider_status = dig(event_content(payload), "subscription.status", "status")
        if provider_status is None:
            return None
        mapped = SUBSCRIPTION_STATUS_MAP.get(str(provider_status).lower())
        if mapped is None:
            logger.warning("Unknown subscription status %s", provider_status)
        return mapped

    async def process(self, payload: Dict[str, Any]) -> None:
        customer = await self.customer_resolver.resolve(payload)
        if customer is None:
            return

        content = event_content(payload)
        subscription_id = dig(content, "subscription.id", "subscription_id")
        period_end = parse_timestamp(
            dig(
                content,
                "subscription.current_term_end",
                "subscription.next_billing_at",
                "current_period_end",
            )
        )
        status = self._status(payload)

        existing = await _find_subscription(
            self.subscription_repository, customer, subscription_id, latest_fallback=False
        )
        if existing is None:
            subscription = Subscription.create(
                customer_id=customer.id,
                plan=plan_name(payload),
                status=status or SubscriptionStatus.ACTIVE,
                chargebee_subscription_id=str(subscription_id) if subscription_id else None,
                current_period_end=period_end,
            )
        else:
            subscription = existing.with_status(
                status or existing.status,
                current_period_end=period_end,
                plan=dig(content, "subscription.plan_id", "plan.name", "plan_id"),
            )
        saved = await self.subscription_repository.save(subscription)
        logger.info(
            "Subscription %s for customer %s is %s", saved.id, customer.id, saved.status.value
        )


class SubscriptionDeletedProcessor(WebhookProcessor):
    """
    customer.subscription.deleted

    Cancels the subscription and sends the cancellation email.
    """

    def __init__(
        self,
        customer_resolver: CustomerResolver,
        subscription_repository: SubscriptionRepository,
        notification_trigger: NotificationTrigger,
    ):
        self.customer_resolver = customer_resolver
        self.subscription_repository = subscription_repository
        self.notification_trigger = notification_trigger

    async def process(self, payload: Dict[str, Any]) -> None:
        customer = await self.customer_resolver.resolve(payload)
        if customer is None:
            return

        subscription_id = dig(event_content(payload), "subscription.id", "subscription_id")
        subscription = await _find_subscription(
            self.subscription_repository, customer, subscription_id, latest_fallback=True
        )
        if subscription is not None:
            await self.subscription_repository.save(subscription.cancel())
        else:
            logger.info("No subscription to cancel for customer %s", customer.id)

        await self.notification_trigger.subscription_cancelled(
            to=str(customer.email),
            username=customer.username,
            plan_name=subscription.plan if subscription else plan_name(payload),
        )


async def _find_subscription(
    repository: SubscriptionRepository,
    customer: Customer,
    subscription_id: Optional[str],
    latest_fallback: bool,
) -> Optional[Subscription]:
    """Subscription by billing id, or the customer's latest one."""
    if subscription_id:
        subscription = await repository.find_by_chargebee_subscription_id(str(subscription_id))
        if subscription is not None or not latest_fallback:
            return subscription
    return await repository.find_latest_for_customer(customer.id)
