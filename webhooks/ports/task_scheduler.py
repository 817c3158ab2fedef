"""
Task scheduler port (interface).

Decouples the HTTP acknowledgement from webhook processing.
"""
from abc import ABC, abstractmethod
import uuid


class TaskScheduler(ABC):
    """Schedules processing of a stored webhook log."""

    @abstractmethod
    async def schedule(self, log_id: uuid.UUID) -> None:
        """
        Schedule processing of a webhook log.

        Args:
            log_id: WebhookLog UUID

        Raises:
            Exception: If the task could not be handed off
        """
        pass
