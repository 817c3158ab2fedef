"""
Integration tests for the admin API.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync

from activations.domain.activation import Activation
from core.domain.value_objects import LicenseStatus, WebhookStatus
from licenses.infrastructure.models import AuditLog as AuditLogModel
from webhooks.domain.webhook_log import WebhookLog
from webhooks.infrastructure.models import WebhookLog as WebhookLogModel


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminLicenseAPI:
    """Integration tests for /admin/licenses."""

    def test_create_with_generated_key(self, api_client, db_customer, db_product):
        response = api_client.post(
            "/admin/licenses",
            {"product_id": str(db_product.id), "customer_id": str(db_customer.id)},
            format="json",
        )

        assert response.status_code == 201
        license = response.data["license"]
        assert len(license["key"]) == 32
        assert license["max_activations"] == db_product.max_activations
        assert license["status"] == "active"
        assert license["usage"] == "0/2"
        assert AuditLogModel.objects.filter(
            entity_id=license["id"], action="LicenseCreated"
        ).exists()

    def test_create_pending_with_own_key(self, api_client, db_customer, db_product):
        response = api_client.post(
            "/admin/licenses",
            {
                "product_id": str(db_product.id),
                "customer_id": str(db_customer.id),
                "status": "pending",
                "key": "CUSTOM-KEY-1",
                "max_activations": 5,
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.data["license"]["key"] == "CUSTOM-KEY-1"
        assert response.data["license"]["status"] == "pending"
        assert response.data["license"]["is_valid"] is False

    def test_create_unknown_product(self, api_client, db_customer):
        response = api_client.post(
            "/admin/licenses",
            {"product_id": str(uuid.uuid4()), "customer_id": str(db_customer.id)},
            format="json",
        )

        assert response.status_code == 404
        assert response.data["error"]["code"] == "PRODUCT_NOT_FOUND"

    def test_create_bad_status(self, api_client, db_customer, db_product):
        response = api_client.post(
            "/admin/licenses",
            {
                "product_id": str(db_product.id),
                "customer_id": str(db_customer.id),
                "status": "suspended",
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error"]["code"] == "VALIDATION_ERROR"

    def test_list_with_filter_and_pagination(self, api_client, make_license):
        for _ in range(3):
            make_license()
        make_license(status=LicenseStatus.REVOKED)

        page = api_client.get("/admin/licenses", {"limit": 2, "page": 2})
        revoked = api_client.get("/admin/licenses", {"status": "revoked"})

        assert page.status_code == 200
        assert page.data["pagination"] == {"page": 2, "limit": 2, "total": 4, "pages": 2}
        assert len(page.data["licenses"]) == 2
        assert [item["status"] for item in revoked.data["licenses"]] == ["revoked"]

    def test_get_update_delete(self, api_client, make_license):
        license = make_license()
        url = f"/admin/licenses/{license.id}"

        fetched = api_client.get(url)
        updated = api_client.put(url, {"max_activations": 4, "expires_on": None}, format="json")
        deleted = api_client.delete(url)
        missing = api_client.get(url)

        assert fetched.data["license"]["key"] == license.key
        assert updated.data["license"]["max_activations"] == 4
        assert updated.data["license"]["expires_on"] is None
        assert updated.data["license"]["key"] == license.key
        assert deleted.status_code == 200
        assert missing.status_code == 404

    def test_status_overwrite(self, api_client, make_license):
        license = make_license()
        url = f"/admin/licenses/{license.id}/status"

        revoked = api_client.put(url, {"status": "revoked"}, format="json")
        verify = api_client.get(f"/license/verify/{license.key}")
        reactivated = api_client.put(url, {"status": "active"}, format="json")
        invalid = api_client.put(url, {"status": "paused"}, format="json")

        assert revoked.data["license"]["status"] == "revoked"
        assert verify.data["valid"] is False
        assert reactivated.data["license"]["status"] == "active"
        assert invalid.status_code == 400

    def test_reset_activations(self, api_client, make_license, activation_repository,
                               license_repository):
        license = make_license(max_activations=3)
        for domain in ("a.example.com", "b.example.com"):
            async_to_sync(activation_repository.add_within_quota)(
                Activation.create(license.id, domain)
            )

        response = api_client.post(f"/admin/licenses/{license.id}/reset")

        stored = async_to_sync(license_repository.find_by_id)(license.id)
        assert response.status_code == 200
        assert response.data["deletedCount"] == 2
        assert async_to_sync(activation_repository.count_by_license)(license.id) == 0
        assert stored.activated_on is None
        assert stored.status == license.status

    def test_reset_unknown_license(self, api_client, db):
        response = api_client.post(f"/admin/licenses/{uuid.uuid4()}/reset")

        assert response.status_code == 404


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminWebhookAPI:
    """Integration tests for /admin/webhooks."""

    def _store(self, repository, provider="chargebee", payload=None):
        return async_to_sync(repository.save)(WebhookLog.create(provider, payload or {}))

    def test_list_filters(self, api_client, webhook_log_repository):
        self._store(webhook_log_repository, "chargebee", {"type": "invoice.payment_failed"})
        self._store(webhook_log_repository, "custom", {"type": "license.activated"})

        response = api_client.get(
            "/admin/webhooks", {"provider": "custom", "eventType": "license.activated"}
        )

        assert response.status_code == 200
        assert response.data["pagination"]["total"] == 1
        assert response.data["logs"][0]["provider"] == "custom"
        assert response.data["logs"][0]["status"] == "pending"

    def test_list_bad_status(self, api_client, db):
        response = api_client.get("/admin/webhooks", {"status": "lost"})

        assert response.status_code == 400

    def test_retry_failed(self, api_client, webhook_log_repository):
        log = self._store(webhook_log_repository, payload={"type": "invoice.generated"})
        async_to_sync(webhook_log_repository.mark_failed)(log.id, "boom")

        response = api_client.post(f"/admin/webhooks/retry/{log.id}")

        assert response.status_code == 200
        # inline scheduler reprocesses immediately; the event type has no processor
        assert WebhookLogModel.objects.get(id=log.id).status == WebhookStatus.PROCESSED.value

    def test_retry_processed_rejected(self, api_client, webhook_log_repository):
        log = self._store(webhook_log_repository)
        async_to_sync(webhook_log_repository.mark_processed)(log.id)

        response = api_client.post(f"/admin/webhooks/retry/{log.id}")

        assert response.status_code == 400
        assert response.data["error"]["code"] == "INVALID_STATE"
        assert WebhookLogModel.objects.get(id=log.id).status == WebhookStatus.PROCESSED.value

    def test_retry_unknown(self, api_client, db):
        response = api_client.post(f"/admin/webhooks/retry/{uuid.uuid4()}")

        assert response.status_code == 404

    def test_stats_and_clear(self, api_client, webhook_log_repository):
        self._store(webhook_log_repository, "chargebee")
        self._store(webhook_log_repository, "custom")

        stats = api_client.get("/admin/webhooks/stats")
        cleared = api_client.delete("/admin/webhooks/clear")

        assert stats.data["total"] == 2
        assert stats.data["last24Hours"] == 2
        assert {"provider": "custom", "status": "pending", "count": 1} in (
            stats.data["byProviderAndStatus"]
        )
        assert cleared.data["deletedCount"] == 2
        assert WebhookLogModel.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthEndpoints:
    """Integration tests for health and readiness."""

    def test_health(self, client):
        response = client.get("/health/")

        assert response.status_code == 200

    def test_ready(self, client):
        response = client.get("/ready/")

        assert response.status_code == 200
