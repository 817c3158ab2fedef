"""
Webhook DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from webhooks.domain.webhook_log import WebhookLog


@dataclass
class WebhookLogDTO:
    """DTO for webhook log information."""

    id: uuid.UUID
    provider: str
    event_type: str
    payload: Dict[str, Any]
    provider_event_id: Optional[str]
    status: str
    error_message: Optional[str]
    attempts: int
    processed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, webhook_log: WebhookLog) -> "WebhookLogDTO":
        return cls(
            id=webhook_log.id,
            provider=webhook_log.provider,
            event_type=webhook_log.event_type,
            payload=webhook_log.payload,
            provider_event_id=webhook_log.provider_event_id,
            status=webhook_log.status.value,
            error_message=webhook_log.error_message,
            attempts=webhook_log.attempts,
            processed_at=webhook_log.processed_at,
            created_at=webhook_log.created_at,
            updated_at=webhook_log.updated_at,
        )


@dataclass
class WebhookLogListDTO:
    """DTO for a page of webhook logs."""

    logs: List[WebhookLogDTO]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@dataclass
class WebhookStatsDTO:
    """DTO for webhook statistics."""

    total: int
    last_24_hours: int
    by_provider_and_status: List[Dict[str, Any]]


@dataclass
class PurgeResultDTO:
    """DTO for purge and clear results."""

    deleted_count: int
    dry_run: bool = False
