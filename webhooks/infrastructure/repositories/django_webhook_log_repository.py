"""
Django implementation of WebhookLogRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db.models import Count, F, Q
from django.utils import timezone

from core.domain.value_objects import WebhookStatus
from webhooks.domain.webhook_log import WebhookLog
from webhooks.infrastructure.models import WebhookLog as WebhookLogModel
from webhooks.ports.webhook_log_repository import WebhookLogRepository


class DjangoWebhookLogRepository(WebhookLogRepository):
    """
    Django ORM implementation of WebhookLogRepository.

    State transitions are single conditional UPDATE statements so that
    concurrent workers cannot both take the same log.
    """

    def _to_domain(self, model: WebhookLogModel) -> WebhookLog:
        """
        Convert Django model to domain entity.

        Args:
            model: Django WebhookLog model

        Returns:
            WebhookLog domain entity
        """
        return WebhookLog(
            id=model.id,
            provider=model.provider,
            event_type=model.event_type,
            payload=model.payload,
            provider_event_id=model.provider_event_id,
            status=WebhookStatus(model.status),
            error_message=model.error_message,
            processing_started_at=model.processing_started_at,
            processed_at=model.processed_at,
            attempts=model.attempts,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, webhook_log: WebhookLog) -> WebhookLogModel:
        model, created = WebhookLogModel.objects.get_or_create(
            id=webhook_log.id,
            defaults={
                "provider": webhook_log.provider,
                "event_type": webhook_log.event_type,
                "payload": webhook_log.payload,
                "provider_event_id": webhook_log.provider_event_id,
                "status": webhook_log.status.value,
                "error_message": webhook_log.error_message,
                "processing_started_at": webhook_log.processing_started_at,
                "processed_at": webhook_log.processed_at,
                "attempts": webhook_log.attempts,
            },
        )
        if not created:
            model.status = webhook_log.status.value
            model.error_message = webhook_log.error_message
            model.processing_started_at = webhook_log.processing_started_at
            model.processed_at = webhook_log.processed_at
            model.attempts = webhook_log.attempts
        return model

    @sync_to_async
    def save(self, webhook_log: WebhookLog) -> WebhookLog:
        """
        Save a webhook log entity.

        Args:
            webhook_log: WebhookLog entity to save

        Returns:
            Saved webhook log entity
        """
        model = self._to_model(webhook_log)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, log_id: uuid.UUID) -> Optional[WebhookLog]:
        try:
            model = WebhookLogModel.objects.get(id=log_id)
            return self._to_domain(model)
        except WebhookLogModel.DoesNotExist:
            return None

    @sync_to_async
    def claim(
        self, log_id: uuid.UUID, current_time: datetime, lease_seconds: int
    ) -> Optional[WebhookLog]:
        """
        Take the processing lock on a pending log.

        Returns:
            Claimed WebhookLog, or None if it is locked or not pending
        """
        stale_before = current_time - timedelta(seconds=lease_seconds)
        updated = (
            WebhookLogModel.objects.filter(id=log_id, status=WebhookStatus.PENDING.value)
            .filter(
                Q(processing_started_at__isnull=True)
                | Q(processing_started_at__lt=stale_before)
            )
            .update(
                processing_started_at=current_time,
                attempts=F("attempts") + 1,
                updated_at=current_time,
            )
        )
        if updated != 1:
            return None
        return self._to_domain(WebhookLogModel.objects.get(id=log_id))

    @sync_to_async
    def reset_for_retry(
        self, log_id: uuid.UUID, current_time: datetime, lease_seconds: int
    ) -> Optional[WebhookLog]:
        """
        Put a failed or stuck log back to pending.

        Returns:
            Reset WebhookLog, or None if it is missing, processed or locked
        """
        stale_before = current_time - timedelta(seconds=lease_seconds)
        updated = (
            WebhookLogModel.objects.filter(
                id=log_id,
                status__in=[WebhookStatus.FAILED.value, WebhookStatus.PENDING.value],
            )
            .filter(
                Q(processing_started_at__isnull=True)
                | Q(processing_started_at__lt=stale_before)
            )
            .update(
                status=WebhookStatus.PENDING.value,
                error_message=None,
                processing_started_at=None,
                updated_at=current_time,
            )
        )
        if updated != 1:
            return None
        return self._to_domain(WebhookLogModel.objects.get(id=log_id))

    @sync_to_async
    def mark_processed(self, log_id: uuid.UUID) -> None:
        now = timezone.now()
        WebhookLogModel.objects.filter(id=log_id).update(
            status=WebhookStatus.PROCESSED.value,
            error_message=None,
            processing_started_at=None,
            processed_at=now,
            updated_at=now,
        )

    @sync_to_async
    def mark_failed(self, log_id: uuid.UUID, error_message: str) -> None:
        WebhookLogModel.objects.filter(id=log_id).update(
            status=WebhookStatus.FAILED.value,
            error_message=error_message,
            processing_started_at=None,
            updated_at=timezone.now(),
        )

    @sync_to_async
    def has_processed_duplicate(
        self, provider: str, provider_event_id: str, exclude_id: uuid.UUID
    ) -> bool:
        return (
            WebhookLogModel.objects.filter(
                provider=provider,
                provider_event_id=provider_event_id,
                status=WebhookStatus.PROCESSED.value,
            )
            .exclude(id=exclude_id)
            .exists()
        )

    @sync_to_async
    def list_logs(
        self,
        provider: Optional[str] = None,
        status: Optional[str] = None,
        event_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[WebhookLog], int]:
        queryset = WebhookLogModel.objects.all()
        if provider:
            queryset = queryset.filter(provider=provider)
        if status:
            queryset = queryset.filter(status=status)
        if event_type:
            queryset = queryset.filter(event_type=event_type)

        total = queryset.count()
        models = queryset.order_by("-created_at")[offset:offset + limit]
        return [self._to_domain(model) for model in models], total

    @sync_to_async
    def clear(self) -> int:
        deleted, _ = WebhookLogModel.objects.all().delete()
        return deleted

    @sync_to_async
    def delete_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        queryset = WebhookLogModel.objects.filter(created_at__lt=cutoff)
        if dry_run:
            return queryset.count()
        deleted, _ = queryset.delete()
        return deleted

    @sync_to_async
    def stats(self, since: datetime) -> Dict[str, Any]:
        """
        Aggregate counts.

        Returns:
            Dict with total, recent and by_provider_and_status
        """
        by_provider_and_status = list(
            WebhookLogModel.objects.values("provider", "status")
            .annotate(count=Count("id"))
            .order_by("provider", "status")
        )
        return {
            "total": WebhookLogModel.objects.count(),
            "recent": WebhookLogModel.objects.filter(created_at__gte=since).count(),
            "by_provider_and_status": by_provider_and_status,
        }
