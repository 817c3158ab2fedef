"""
WebhookLog domain entity.

Every inbound delivery is stored as a WebhookLog before it is processed
and before the provider gets its acknowledgement.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import WebhookStatus
from webhooks.domain.services import (
    extract_event_type,
    extract_provider_event_id,
    normalize_payload,
)


@dataclass(frozen=True)
class WebhookLog:
    """
    WebhookLog domain entity.

    Status moves pending -> processed | failed, and back to pending on retry.
    """

    id: uuid.UUID
    provider: str
    event_type: str
    payload: Dict[str, Any]
    provider_event_id: Optional[str]
    status: WebhookStatus
    error_message: Optional[str]
    processing_started_at: Optional[datetime]
    processed_at: Optional[datetime]
    attempts: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate webhook log entity."""
        if not self.provider:
            raise ValueError("Provider is required")
        if not self.event_type:
            raise ValueError("Event type is required")

    @classmethod
    def create(
        cls,
        provider: str,
        raw_payload: Any,
        log_id: Optional[uuid.UUID] = None,
    ) -> "WebhookLog":
        """
        Create a pending WebhookLog from a raw delivery.

        Args:
            provider: Provider name from the URL
            raw_payload: Decoded request body, stored verbatim
            log_id: Optional UUID (generated if not provided)

        Returns:
            WebhookLog entity instance
        """
        payload = normalize_payload(raw_payload)
        now = datetime.now(timezone.utc)
        return cls(
            id=log_id or uuid.uuid4(),
            provider=provider,
            event_type=extract_event_type(payload),
            payload=payload,
            provider_event_id=extract_provider_event_id(payload),
            status=WebhookStatus.PENDING,
            error_message=None,
            processing_started_at=None,
            processed_at=None,
            attempts=0,
            created_at=now,
            updated_at=now,
        )

    def is_locked(self, current_time: datetime, lease_seconds: int) -> bool:
        """
        Check whether a processing run holds a live lock on this log.

        A lock older than the lease belongs to a run that died.
        """
        if self.processing_started_at is None:
            return False
        return current_time - self.processing_started_at < timedelta(seconds=lease_seconds)

    def reset_for_retry(self) -> "WebhookLog":
        """Create a pending copy with the error and lock cleared."""
        return replace(
            self,
            status=WebhookStatus.PENDING,
            error_message=None,
            processing_started_at=None,
            updated_at=datetime.now(timezone.utc),
        )
