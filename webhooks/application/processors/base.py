"""
Webhook processor base classes.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from customers.domain.customer import Customer
from customers.ports.customer_repository import CustomerRepository
from webhooks.domain.services import dig, event_content, extract_customer_reference

logger = logging.getLogger(__name__)

DEFAULT_PLAN_NAME = "Pro"


class WebhookProcessor(ABC):
    """
    Handles one (provider, event type) pair.

    A processor that raises marks the webhook log failed.
    """

    @abstractmethod
    async def process(self, payload: Dict[str, Any]) -> None:
        """
        Apply the event's side effects.

        Args:
            payload: Stored webhook payload
        """
        pass


class CustomerResolver:
    """Finds the customer a billing event is about."""

    def __init__(self, customer_repository: CustomerRepository):
        """Initialize resolver with the customer repository."""
        self.customer_repository = customer_repository

    async def resolve(self, payload: Dict[str, Any]) -> Optional[Customer]:
        """
        Look the customer up by billing id first, then by email.

        Args:
            payload: Webhook payload

        Returns:
            Customer entity or None if nothing matches
        """
        chargebee_customer_id, email = extract_customer_reference(payload)
        customer = None
        if chargebee_customer_id:
            customer = await self.customer_repository.find_by_chargebee_customer_id(
                chargebee_customer_id
            )
        if customer is None and email:
            customer = await self.customer_repository.find_by_email(email)
        if customer is None:
            logger.info(
                "No customer matches webhook (customer id %s, email %s)",
                chargebee_customer_id,
                email,
            )
        return customer


def plan_name(payload: Dict[str, Any]) -> str:
    """Plan named by an event, or the default plan name."""
    content = event_content(payload)
    return str(
        dig(
            content,
            "subscription.plan_id",
            "plan.name",
            "plan_id",
            default=DEFAULT_PLAN_NAME,
        )
    )


def amount(payload: Dict[str, Any]) -> Any:
    """Invoice total or amount named by an event."""
    return dig(event_content(payload), "invoice.total", "amount", default=0)
