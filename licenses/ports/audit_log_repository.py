"""
Audit log repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class AuditLogRepository(ABC):
    """Append-only store for domain event records."""

    @abstractmethod
    async def record(
        self,
        entity_type: str,
        entity_id: str,
        action: str,
        changes: Dict[str, Any],
        actor: str = "system",
    ) -> None:
        """
        Append an audit entry.

        Args:
            entity_type: Kind of record the event concerns
            entity_id: Identifier of that record
            action: Event type
            changes: Event payload
            actor: Who performed the action
        """
        pass
