"""
Processors for events sent by our own storefront ("custom" provider).
"""
import logging
from typing import Any, Dict

from core.domain.value_objects import SubscriptionStatus
from customers.domain.subscription import Subscription
from customers.ports.subscription_repository import SubscriptionRepository
from notifications.application.notification_trigger import NotificationTrigger
from webhooks.application.processors.base import (
    CustomerResolver,
    WebhookProcessor,
    amount,
    plan_name,
)
from webhooks.domain.services import dig, event_content, parse_timestamp

logger = logging.getLogger(__name__)


class SubscriptionRenewedProcessor(WebhookProcessor):
    """
    user.subscription.renewed

    Marks the subscription active, moves its period end and sends the
    renewal email.
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

        content = event_content(payload)
        period_end = parse_timestamp(
            dig(
                content,
                "subscription.next_billing_at",
                "next_billing_date",
                "subscription.current_period_end",
                "current_period_end",
            )
        )

        subscription_id = dig(content, "subscription.id", "subscription_id")
        subscription = None
        if subscription_id:
            subscription = await self.subscription_repository.find_by_chargebee_subscription_id(
                str(subscription_id)
            )
        if subscription is None:
            subscription = await self.subscription_repository.find_latest_for_customer(
                customer.id
            )

        if subscription is None:
            subscription = Subscription.create(
                customer_id=customer.id,
                plan=plan_name(payload),
                status=SubscriptionStatus.ACTIVE,
                chargebee_subscription_id=str(subscription_id) if subscription_id else None,
                current_period_end=period_end,
            )
        else:
            subscription = subscription.with_status(
                SubscriptionStatus.ACTIVE, current_period_end=period_end
            )
        saved = await self.subscription_repository.save(subscription)

        await self.notification_trigger.renewal(
            to=str(customer.email),
            username=customer.username,
            plan_name=saved.plan,
            amount=amount(payload),
            renewal_date=saved.current_period_end.date().isoformat()
            if saved.current_period_end
            else None,
        )


class LicenseActivatedNotificationProcessor(WebhookProcessor):
    """license.activated - sends the license activated email."""

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

        content = event_content(payload)
        await self.notification_trigger.license_activated(
            to=str(customer.email),
            username=customer.username,
            product_name=dig(content, "product.name", "product_name", default="your product"),
            license_key=dig(content, "license.key", "license_key", default=""),
            domain=dig(content, "license.domain", "domain"),
        )
