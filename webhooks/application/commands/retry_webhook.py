"""
RetryWebhookCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class RetryWebhookCommand:
    """Command to reprocess a failed or stuck webhook log."""

    log_id: uuid.UUID
