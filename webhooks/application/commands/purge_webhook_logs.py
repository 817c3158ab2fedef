"""
PurgeWebhookLogsCommand and ClearWebhookLogsCommand.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class PurgeWebhookLogsCommand:
    """Delete logs older than the retention window."""

    days: int = 30
    current_time: Optional[datetime] = None
    dry_run: bool = False


@dataclass
class ClearWebhookLogsCommand:
    """Delete every log."""
