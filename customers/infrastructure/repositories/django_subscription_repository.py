"""
Django implementation of SubscriptionRepository port.
"""

import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import SubscriptionStatus
from customers.domain.subscription import Subscription
from customers.infrastructure.models import Subscription as SubscriptionModel
from customers.ports.subscription_repository import SubscriptionRepository


class DjangoSubscriptionRepository(SubscriptionRepository):
    """Django ORM implementation of SubscriptionRepository."""

    def _to_domain(self, model: SubscriptionModel) -> Subscription:
        return Subscription(
            id=model.id,
            customer_id=model.customer_id,
            plan=model.plan,
            status=SubscriptionStatus(model.status),
            chargebee_subscription_id=model.chargebee_subscription_id,
            current_period_end=model.current_period_end,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _to_model(self, subscription: Subscription) -> SubscriptionModel:
        # pylint: disable=no-member
        model, created = await sync_to_async(SubscriptionModel.objects.get_or_create)(
            id=subscription.id,
            defaults={
                "customer_id": subscription.customer_id,
                "plan": subscription.plan,
                "status": subscription.status.value,
                "chargebee_subscription_id": subscription.chargebee_subscription_id,
                "current_period_end": subscription.current_period_end,
            },
        )
        if not created:
            model.plan = subscription.plan
            model.status = subscription.status.value
            model.chargebee_subscription_id = subscription.chargebee_subscription_id
            model.current_period_end = subscription.current_period_end
        return model

    async def save(self, subscription: Subscription) -> Subscription:
        model = await self._to_model(subscription)
        await sync_to_async(model.save)()
        return self._to_domain(model)

    async def find_by_chargebee_subscription_id(
        self, chargebee_subscription_id: str
    ) -> Optional[Subscription]:
        try:
            # pylint: disable=no-member
            model = await sync_to_async(SubscriptionModel.objects.get)(
                chargebee_subscription_id=chargebee_subscription_id
            )
            return self._to_domain(model)
        except SubscriptionModel.DoesNotExist:  # pylint: disable=no-member
            return None

    async def find_latest_for_customer(
        self, customer_id: uuid.UUID
    ) -> Optional[Subscription]:
        # pylint: disable=no-member
        model = await sync_to_async(
            SubscriptionModel.objects.filter(customer_id=customer_id)
            .order_by("-created_at")
            .first
        )()
        return self._to_domain(model) if model else None
