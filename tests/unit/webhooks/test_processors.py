"""
Unit tests for the Chargebee and custom webhook processors.
"""

import uuid
from datetime import datetime, timezone

import pytest

from core.domain.value_objects import LicenseStatus, SubscriptionStatus
from customers.domain.customer import Customer
from customers.domain.subscription import Subscription
from licenses.domain.license import License
from notifications.application.notification_trigger import NotificationTrigger
from products.domain.product import Product
from webhooks.application.routing import build_routing_table


class FakeCustomerRepository:
    def __init__(self, *customers):
        self.customers = list(customers)

    async def find_by_id(self, customer_id):
        return next((c for c in self.customers if c.id == customer_id), None)

    async def find_by_chargebee_customer_id(self, chargebee_customer_id):
        return next(
            (c for c in self.customers if c.chargebee_customer_id == chargebee_customer_id), None
        )

    async def find_by_email(self, email):
        return next((c for c in self.customers if str(c.email) == email), None)


class FakeSubscriptionRepository:
    def __init__(self):
        self.subscriptions = {}

    async def save(self, subscription):
        self.subscriptions[subscription.id] = subscription
        return subscription

    async def find_by_chargebee_subscription_id(self, chargebee_subscription_id):
        return next(
            (
                s
                for s in self.subscriptions.values()
                if s.chargebee_subscription_id == chargebee_subscription_id
            ),
            None,
        )

    async def find_latest_for_customer(self, customer_id):
        owned = [s for s in self.subscriptions.values() if s.customer_id == customer_id]
        return max(owned, key=lambda s: s.created_at) if owned else None


class FakeProductRepository:
    def __init__(self, *products):
        self.products = {p.id: p for p in products}

    async def find_by_id(self, product_id):
        return self.products.get(product_id)


@pytest.fixture
def customer():
    return Customer.create(
        username="buyer", email="buyer@example.com", chargebee_customer_id="cb_cust_1"
    )


@pytest.fixture
def product():
    return Product.create(name="Theme Pro", max_activations=2)


@pytest.fixture
def subscription_repository():
    return FakeSubscriptionRepository()


@pytest.fixture
def routing(customer, product, subscription_repository, memory_license_repository,
            email_sender, event_bus):
    return build_routing_table(
        customer_repository=FakeCustomerRepository(customer),
        subscription_repository=subscription_repository,
        license_repository=memory_license_repository,
        product_repository=FakeProductRepository(product),
        notification_trigger=NotificationTrigger(email_sender),
        event_bus=event_bus,
    )


class TestPaymentSucceeded:
    """Tests for invoice.payment_succeeded."""

    @pytest.mark.asyncio
    async def test_activates_pending_licenses(self, routing, customer, product,
                                              memory_license_repository, email_sender):
        pending = License.create(
            product_id=product.id,
            customer_id=customer.id,
            key="PENDINGKEY",
            status=LicenseStatus.PENDING,
        )
        await memory_license_repository.save(pending)
        payload = {
            "id": "ev_1",
            "event_type": "invoice.payment_succeeded",
            "content": {
                "customer": {"id": "cb_cust_1"},
                "invoice": {"id": "inv_1", "total": 4900},
            },
        }

        await routing[("chargebee", "invoice.payment_succeeded")].process(payload)

        stored = await memory_license_repository.find_by_id(pending.id)
        assert stored.status == LicenseStatus.ACTIVE
        template_key, to, variables = email_sender.sent[0]
        assert template_key == "purchase"
        assert to == "buyer@example.com"
        assert variables["license_key"] == "PENDINGKEY"
        assert variables["product_name"] == "Theme Pro"
        assert variables["amount"] == 4900

    @pytest.mark.asyncio
    async def test_customer_found_by_email(self, routing, email_sender):
        payload = {"content": {"customer": {"id": "cb_other", "email": "buyer@example.com"}}}

        await routing[("chargebee", "invoice.payment_succeeded")].process(payload)

        assert email_sender.sent[0][1] == "buyer@example.com"

    @pytest.mark.asyncio
    async def test_unknown_customer_is_a_no_op(self, routing, email_sender):
        payload = {"content": {"customer": {"id": "cb_nobody"}}}

        await routing[("chargebee", "invoice.payment_succeeded")].process(payload)

        assert email_sender.sent == []


class TestSubscriptionProcessors:
    """Tests for subscription lifecycle events."""

    @pytest.mark.asyncio
    async def test_created_then_updated_then_deleted(self, routing, customer,
                                                     subscription_repository, email_sender):
        content = {
            "customer": {"id": "cb_cust_1"},
            "subscription": {"id": "sub_1", "plan_id": "pro-annual", "current_term_end": 1767225600},
        }

        await routing[("chargebee", "customer.subscription.created")].process({"content": content})
        created = await subscription_repository.find_by_chargebee_subscription_id("sub_1")
        assert created.status == SubscriptionStatus.ACTIVE
        assert created.plan == "pro-annual"
        assert created.current_period_end == datetime(2026, 1, 1, tzinfo=timezone.utc)

        paused = {**content, "subscription": {**content["subscription"], "status": "paused"}}
        await routing[("chargebee", "customer.subscription.updated")].process({"content": paused})
        updated = await subscription_repository.find_by_chargebee_subscription_id("sub_1")
        assert updated.id == created.id
        assert updated.status == SubscriptionStatus.PENDING

        await routing[("chargebee", "customer.subscription.deleted")].process({"content": content})
        deleted = await subscription_repository.find_by_chargebee_subscription_id("sub_1")
        assert deleted.status == SubscriptionStatus.CANCELLED
        assert email_sender.sent[-1][0] == "subscription_cancelled"

    @pytest.mark.asyncio
    async def test_renewal_reactivates(self, routing, customer, subscription_repository,
                                       email_sender):
        expired = Subscription.create(
            customer_id=customer.id,
            plan="Pro",
            status=SubscriptionStatus.EXPIRED,
        )
        await subscription_repository.save(expired)
        payload = {
            "eventType": "user.subscription.renewed",
            "email": "buyer@example.com",
            "next_billing_date": "2026-03-01",
            "amount": 99,
        }

        await routing[("custom", "user.subscription.renewed")].process(payload)

        renewed = await subscription_repository.find_latest_for_customer(customer.id)
        assert renewed.status == SubscriptionStatus.ACTIVE
        template_key, _, variables = email_sender.sent[0]
        assert template_key == "renewal"
        assert variables["renewal_date"] == "2026-03-01"


class TestCustomLicenseActivated:
    """Tests for the custom license.activated notification."""

    @pytest.mark.asyncio
    async def test_sends_activation_email(self, routing, email_sender):
        payload = {
            "type": "license.activated",
            "customer_id": "cb_cust_1",
            "license": {"key": "KEY42", "domain": "shop.example.com"},
            "product_name": "Theme Pro",
        }

        await routing[("custom", "license.activated")].process(payload)

        template_key, _, variables = email_sender.sent[0]
        assert template_key == "license_activated"
        assert variables["license_key"] == "KEY42"
        assert variables["domain"] == "shop.example.com"
        assert variables["product_name"] == "Theme Pro"


def test_routing_table_keys(routing):
    assert set(routing) == {
        ("chargebee", "invoice.payment_succeeded"),
        ("chargebee", "invoice.payment_failed"),
        ("chargebee", "customer.subscription.created"),
        ("chargebee", "customer.subscription.updated"),
        ("chargebee", "customer.subscription.deleted"),
        ("custom", "user.subscription.renewed"),
        ("custom", "license.activated"),
    }
