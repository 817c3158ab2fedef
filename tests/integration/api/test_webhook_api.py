"""
Integration tests for the webhook receiver.

The test settings use the inline task scheduler, so a delivery is fully
processed before the response returns.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync

from core.domain.value_objects import LicenseStatus, SubscriptionStatus, WebhookStatus
from webhooks.infrastructure.models import WebhookLog as WebhookLogModel


def _invoice_paid(customer):
    return {
        "id": f"ev_{uuid.uuid4().hex[:12]}",
        "event_type": "invoice.payment_succeeded",
        "content": {
            "customer": {"id": customer.chargebee_customer_id, "email": str(customer.email)},
            "invoice": {"id": "inv_001", "total": 4900},
        },
    }


@pytest.mark.django_db
@pytest.mark.integration
class TestWebhookReceiverAPI:
    """Integration tests for POST /webhooks/{provider}."""

    def test_payment_succeeded_end_to_end(self, api_client, make_license, db_customer,
                                          license_repository, mailoutbox):
        pending = make_license(status=LicenseStatus.PENDING)

        response = api_client.post(
            "/webhooks/chargebee", _invoice_paid(db_customer), format="json"
        )

        assert response.status_code == 200
        assert response.data["success"] is True
        assert response.data["message"] == "Webhook received successfully"
        log = WebhookLogModel.objects.get(id=response.data["webhookId"])
        assert log.status == WebhookStatus.PROCESSED.value
        assert log.event_type == "invoice.payment_succeeded"
        stored = async_to_sync(license_repository.find_by_id)(pending.id)
        assert stored.status == LicenseStatus.ACTIVE
        purchase = [m for m in mailoutbox if str(db_customer.email) in m.to]
        assert len(purchase) == 1
        assert pending.key in purchase[0].body

    def test_redelivery_has_no_second_side_effect(self, api_client, make_license, db_customer,
                                                  mailoutbox):
        make_license(status=LicenseStatus.PENDING)
        payload = _invoice_paid(db_customer)

        first = api_client.post("/webhooks/chargebee", payload, format="json")
        second = api_client.post("/webhooks/chargebee", payload, format="json")

        assert first.data["webhookId"] != second.data["webhookId"]
        assert WebhookLogModel.objects.filter(status="processed").count() == 2
        assert len(mailoutbox) == 1

    def test_subscription_created(self, api_client, db_customer, subscription_repository):
        payload = {
            "id": "ev_sub_1",
            "event_type": "customer.subscription.created",
            "content": {
                "customer": {"id": db_customer.chargebee_customer_id},
                "subscription": {"id": "sub_42", "plan_id": "pro-monthly"},
            },
        }

        api_client.post("/webhooks/chargebee", payload, format="json")

        subscription = async_to_sync(subscription_repository.find_by_chargebee_subscription_id)(
            "sub_42"
        )
        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.customer_id == db_customer.id

    def test_empty_body_is_logged_as_unknown(self, api_client, db):
        response = api_client.generic("POST", "/webhooks/chargebee", b"")

        assert response.status_code == 200
        log = WebhookLogModel.objects.get(id=response.data["webhookId"])
        assert log.event_type == "unknown"
        assert log.payload == {}
        assert log.status == WebhookStatus.PROCESSED.value

    def test_non_json_body_is_kept(self, api_client, db):
        response = api_client.generic(
            "POST", "/webhooks/custom", b"plain text ping", content_type="text/plain"
        )

        assert response.status_code == 200
        log = WebhookLogModel.objects.get(id=response.data["webhookId"])
        assert log.payload == {"raw": "plain text ping"}

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_number_body_is_kept_as_text(self, api_client, db, constant):
        body = '{"type": "invoice.generated", "amount": ' + constant + "}"

        response = api_client.generic(
            "POST", "/webhooks/chargebee", body.encode(), content_type="application/json"
        )

        assert response.status_code == 200
        log = WebhookLogModel.objects.get(id=response.data["webhookId"])
        assert log.payload == {"raw": body}
        assert log.event_type == "unknown"

    def test_nul_escape_in_body_is_dropped(self, api_client, db):
        body = b'{"type": "invoice.generated", "note": "a\\u0000b"}'

        response = api_client.generic(
            "POST", "/webhooks/chargebee", body, content_type="application/json"
        )

        assert response.status_code == 200
        log = WebhookLogModel.objects.get(id=response.data["webhookId"])
        assert log.payload == {"type": "invoice.generated", "note": "ab"}

    def test_unknown_customer_still_processed(self, api_client, db):
        payload = {
            "event_type": "invoice.payment_failed",
            "content": {"customer": {"id": "cb_nobody"}},
        }

        response = api_client.post("/webhooks/chargebee", payload, format="json")

        log = WebhookLogModel.objects.get(id=response.data["webhookId"])
        assert log.status == WebhookStatus.PROCESSED.value

    def test_invalid_provider(self, api_client, db):
        response = api_client.post("/webhooks/bad!provider", {}, format="json")

        assert response.status_code == 400
        assert WebhookLogModel.objects.count() == 0
