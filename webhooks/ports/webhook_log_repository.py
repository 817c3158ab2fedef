"""
WebhookLog repository port (interface).

This defines the contract for webhook log persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import uuid

from webhooks.domain.webhook_log import WebhookLog


class WebhookLogRepository(ABC):
    """
    Abstract repository for WebhookLog entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, webhook_log: WebhookLog) -> WebhookLog:
        """
        Save a webhook log entity.

        Args:
            webhook_log: WebhookLog entity to save

        Returns:
            Saved webhook log entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, log_id: uuid.UUID) -> Optional[WebhookLog]:
        """
        Find a webhook log by ID.

        Args:
            log_id: WebhookLog UUID

        Returns:
            WebhookLog entity or None if not found
        """
        pass

    @abstractmethod
    async def claim(
        self, log_id: uuid.UUID, current_time: datetime, lease_seconds: int
    ) -> Optional[WebhookLog]:
        """
        Take the processing lock on a pending log.

        Succeeds only when the log is pending and holds no live lock
        (compare-and-swap). Increments attempts.

        Args:
            log_id: WebhookLog UUID
            current_time: Lock timestamp
            lease_seconds: Age after which an existing lock is considered dead

        Returns:
            Claimed WebhookLog, or None if another run holds it or it is not pending
        """
        pass

    @abstractmethod
    async def reset_for_retry(
        self, log_id: uuid.UUID, current_time: datetime, lease_seconds: int
    ) -> Optional[WebhookLog]:
        """
        Put a failed or stuck log back to pending.

        Succeeds only when the log is not processed and holds no live lock
        (compare-and-swap). Clears the error and the lock.

        Args:
            log_id: WebhookLog UUID
            current_time: Reset timestamp
            lease_seconds: Age after which an existing lock is considered dead

        Returns:
            Reset WebhookLog, or None if it is missing, processed or locked
        """
        pass

    @abstractmethod
    async def mark_processed(self, log_id: uuid.UUID) -> None:
        """Mark a log processed, clearing error and lock."""
        pass

    @abstractmethod
    async def mark_failed(self, log_id: uuid.UUID, error_message: str) -> None:
        """Mark a log failed with an error message, clearing the lock."""
        pass

    @abstractmethod
    async def has_processed_duplicate(
        self, provider: str, provider_event_id: str, exclude_id: uuid.UUID
    ) -> bool:
        """
        Check whether another delivery of the same provider event was processed.

        Args:
            provider: Provider name
            provider_event_id: Provider's event id
            exclude_id: Log to ignore (the one being processed)

        Returns:
            True if a processed duplicate exists
        """
        pass

    @abstractmethod
    async def list_logs(
        self,
        provider: Optional[str] = None,
        status: Optional[str] = None,
        event_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[WebhookLog], int]:
        """
        List logs newest first.

        Returns:
            Tuple of (logs, total matching rows)
        """
        pass

    @abstractmethod
    async def clear(self) -> int:
        """
        Delete every log.

        Returns:
            Number of deleted logs
        """
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        """
        Delete logs created before cutoff.

        Args:
            cutoff: Age boundary
            dry_run: Only count

        Returns:
            Number of (would be) deleted logs
        """
        pass

    @abstractmethod
    async def stats(self, since: datetime) -> Dict[str, Any]:
        """
        Aggregate counts.

        Args:
            since: Start of the recent window

        Returns:
            Dict with total, recent and by_provider_and_status
        """
        pass
