"""
Unit tests for webhook payload helpers and the WebhookLog entity.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import WebhookStatus
from webhooks.domain.services import (
    dig,
    event_content,
    extract_customer_reference,
    extract_event_type,
    extract_provider_event_id,
    normalize_payload,
    parse_timestamp,
)
from webhooks.domain.webhook_log import WebhookLog


class TestEventType:
    """Tests for event type extraction."""

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"type": "invoice.payment_succeeded"}, "invoice.payment_succeeded"),
            ({"event_type": "license.activated"}, "license.activated"),
            ({"eventType": "user.subscription.renewed"}, "user.subscription.renewed"),
            ({"type": "", "event_type": "fallback"}, "fallback"),
            ({}, "unknown"),
            ({"raw": "plain text"}, "unknown"),
        ],
    )
    def test_extract_event_type(self, payload, expected):
        assert extract_event_type(payload) == expected

    def test_provider_event_id(self):
        assert extract_provider_event_id({"id": "ev_1"}) == "ev_1"
        assert extract_provider_event_id({"event_id": 42}) == "42"
        assert extract_provider_event_id({"id": ""}) is None
        assert extract_provider_event_id({}) is None


class TestPayloadHelpers:
    """Tests for payload navigation helpers."""

    def test_normalize_non_object(self):
        assert normalize_payload(["a", "b"]) == {"raw": ["a", "b"]}
        assert normalize_payload("text") == {"raw": "text"}
        assert normalize_payload({"a": 1}) == {"a": 1}

    def test_normalize_drops_nul_characters(self):
        payload = {"type": "note\x00.added", "con\x00tent": [{"text": "a\x00b"}, 7, None]}

        assert normalize_payload(payload) == {
            "type": "note.added",
            "content": [{"text": "ab"}, 7, None],
        }
        assert normalize_payload("ping\x00") == {"raw": "ping"}

    def test_event_content_nested_and_flat(self):
        nested = {"content": {"customer": {"id": "c1"}}}
        assert event_content(nested) == {"customer": {"id": "c1"}}
        flat = {"customer_id": "c1"}
        assert event_content(flat) is flat

    def test_dig(self):
        data = {"customer": {"id": "c1", "email": ""}, "email": "b@example.com"}
        assert dig(data, "customer.id") == "c1"
        assert dig(data, "customer.email", "email") == "b@example.com"
        assert dig(data, "missing.path", default="x") == "x"
        assert dig({"customer": "flat"}, "customer.id") is None

    def test_customer_reference(self):
        payload = {"content": {"customer": {"id": "cb_1", "email": "a@example.com"}}}
        assert extract_customer_reference(payload) == ("cb_1", "a@example.com")
        assert extract_customer_reference({"email": "a@example.com"}) == (None, "a@example.com")

    def test_parse_timestamp(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp("86400") == datetime(1970, 1, 2, tzinfo=timezone.utc)
        assert parse_timestamp("2025-01-31") == datetime(2025, 1, 31, tzinfo=timezone.utc)
        assert parse_timestamp("2025-01-31T10:00:00Z") == datetime(
            2025, 1, 31, 10, tzinfo=timezone.utc
        )
        assert parse_timestamp("tomorrow") is None
        assert parse_timestamp(None) is None


class TestWebhookLog:
    """Tests for WebhookLog domain entity."""

    def test_create_from_empty_payload(self):
        log = WebhookLog.create("chargebee", {})
        assert log.event_type == "unknown"
        assert log.status == WebhookStatus.PENDING
        assert log.payload == {}
        assert log.attempts == 0

    def test_create_keeps_payload_verbatim(self):
        payload = {"id": "ev_9", "type": "invoice.payment_failed", "content": {"x": 1}}
        log = WebhookLog.create("chargebee", payload)
        assert log.payload == payload
        assert log.provider_event_id == "ev_9"

    def test_lock_lease(self):
        now = datetime.now(timezone.utc)
        log = WebhookLog.create("custom", {})
        assert log.is_locked(now, 300) is False

        from dataclasses import replace

        running = replace(log, processing_started_at=now - timedelta(seconds=10))
        assert running.is_locked(now, 300) is True
        assert running.is_locked(now, 5) is False

    def test_reset_for_retry(self):
        from dataclasses import replace

        failed = replace(
            WebhookLog.create("custom", {}),
            status=WebhookStatus.FAILED,
            error_message="boom",
            processing_started_at=datetime.now(timezone.utc),
        )
        reset = failed.reset_for_retry()
        assert reset.status == WebhookStatus.PENDING
        assert reset.error_message is None
        assert reset.processing_started_at is None
