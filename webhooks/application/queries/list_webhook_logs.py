"""
ListWebhookLogsQuery and WebhookStatsQuery.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ListWebhookLogsQuery:
    """Admin listing of webhook logs."""

    page: int = 1
    limit: int = 50
    provider: Optional[str] = None
    status: Optional[str] = None
    event_type: Optional[str] = None


@dataclass
class WebhookStatsQuery:
    """Aggregate webhook counts."""

    current_time: Optional[datetime] = None
