"""
IngestWebhookCommand.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class IngestWebhookCommand:
    """Command to log an inbound delivery and schedule its processing."""

    provider: str
    payload: Any
