"""
Django implementation of AuditLogRepository port.
"""
from typing import Any, Dict

from asgiref.sync import sync_to_async

from licenses.infrastructure.models import AuditLog as AuditLogModel
from licenses.ports.audit_log_repository import AuditLogRepository


class DjangoAuditLogRepository(AuditLogRepository):
    """Writes audit entries to the audit_logs table."""

    @sync_to_async
    def record(
        self,
        entity_type: str,
        entity_id: str,
        action: str,
        changes: Dict[str, Any],
        actor: str = "system",
    ) -> None:
        AuditLogModel.objects.create(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            changes=changes,
            actor=actor,
        )
