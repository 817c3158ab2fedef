"""
Subscription repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from customers.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """Abstract repository for Subscription entities."""

    @abstractmethod
    async def save(self, subscription: Subscription) -> Subscription:
        """Save a subscription entity."""
        pass

    @abstractmethod
    async def find_by_chargebee_subscription_id(
        self, chargebee_subscription_id: str
    ) -> Optional[Subscription]:
        """Find a subscription by billing provider subscription id."""
        pass

    @abstractmethod
    async def find_latest_for_customer(
        self, customer_id: uuid.UUID
    ) -> Optional[Subscription]:
        """Find the most recently created subscription of a customer."""
        pass
