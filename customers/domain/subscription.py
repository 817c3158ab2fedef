"""
Subscription domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import SubscriptionStatus


@dataclass(frozen=True)
class Subscription:
    """
    Subscription domain entity.

    Mutated only by billing webhooks; every change returns a new instance.
    """

    id: uuid.UUID
    customer_id: uuid.UUID
    plan: str
    status: SubscriptionStatus
    chargebee_subscription_id: Optional[str]
    current_period_end: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate subscription entity."""
        if not self.customer_id:
            raise ValueError("Customer ID is required")
        if not self.plan:
            raise ValueError("Plan is required")

    @classmethod
    def create(
        cls,
        customer_id: uuid.UUID,
        plan: str,
        status: SubscriptionStatus = SubscriptionStatus.PENDING,
        chargebee_subscription_id: Optional[str] = None,
        current_period_end: Optional[datetime] = None,
        subscription_id: Optional[uuid.UUID] = None,
    ) -> "Subscription":
        """
        Create a new Subscription entity.

        Args:
            customer_id: Owning customer UUID
            plan: Plan identifier
            status: Initial status
            chargebee_subscription_id: Billing provider subscription id
            current_period_end: End of the paid period
            subscription_id: Optional UUID (generated if not provided)

        Returns:
            Subscription entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=subscription_id or uuid.uuid4(),
            customer_id=customer_id,
            plan=plan,
            status=status,
            chargebee_subscription_id=chargebee_subscription_id,
            current_period_end=current_period_end,
            created_at=now,
            updated_at=now,
        )

    def with_status(
        self,
        status: SubscriptionStatus,
        current_period_end: Optional[datetime] = None,
        plan: Optional[str] = None,
    ) -> "Subscription":
        """
        Return a copy with a new status.

        The period end and plan are only replaced when given.
        """
        return replace(
            self,
            status=status,
            plan=plan or self.plan,
            current_period_end=current_period_end or self.current_period_end,
            updated_at=datetime.now(timezone.utc),
        )

    def cancel(self) -> "Subscription":
        """Return a cancelled copy."""
        return self.with_status(SubscriptionStatus.CANCELLED)
