"""
Unit tests for NotificationTrigger.
"""

import pytest

from notifications.application.notification_trigger import NotificationTrigger
from notifications.domain.email import EmailTemplate


class TestNotificationTrigger:
    """Tests for NotificationTrigger."""

    @pytest.mark.asyncio
    async def test_sends_through_sender(self, email_sender):
        trigger = NotificationTrigger(email_sender)

        result = await trigger.purchase(
            to="buyer@example.com",
            username="buyer",
            product_name="Theme Pro",
            amount=4900,
            license_key="KEY1",
        )

        assert result.success is True
        template_key, to, variables = email_sender.sent[0]
        assert template_key == "purchase"
        assert to == "buyer@example.com"
        assert variables["license_key"] == "KEY1"

    @pytest.mark.asyncio
    async def test_transport_error_is_reported_not_raised(self, broken_email_sender):
        trigger = NotificationTrigger(broken_email_sender)

        result = await trigger.renewal(
            to="buyer@example.com", username="buyer", plan_name="Pro", amount=10
        )

        assert result.success is False
        assert "refused" in result.error

    @pytest.mark.asyncio
    @pytest.mark.parametrize("to", [None, ""])
    async def test_missing_recipient(self, email_sender, to):
        trigger = NotificationTrigger(email_sender)

        result = await trigger.notify(EmailTemplate.PAYMENT_FAILED, to, {})

        assert result.success is False
        assert result.error == "No recipient"
        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_template_keys(self, email_sender):
        trigger = NotificationTrigger(email_sender)
        await trigger.payment_failed("a@example.com", "a", 5, "inv_1")
        await trigger.license_activated("a@example.com", "a", "Theme", "KEY", "a.example.com")
        await trigger.subscription_cancelled("a@example.com", "a", "Pro")

        assert [sent[0] for sent in email_sender.sent] == [
            "payment_failed",
            "license_activated",
            "subscription_cancelled",
        ]
