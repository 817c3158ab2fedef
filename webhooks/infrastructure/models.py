"""
WebhookLog model.
"""
import uuid

from django.db import models


class WebhookLog(models.Model):
    """
    Durable record of an inbound webhook delivery.
    Written before processing and kept until purged.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("processed", "Processed"),
        ("failed", "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider = models.CharField(max_length=50, help_text="Provider name from the URL")
    event_type = models.CharField(max_length=100)
    payload = models.JSONField(help_text="Request body as received")
    provider_event_id = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    error_message = models.TextField(null=True, blank=True)
    processing_started_at = models.DateTimeField(
        null=True, blank=True, help_text="Processing lock, cleared when the run ends"
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    attempts = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "webhook_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["provider", "status"]),
            models.Index(fields=["status", "created_at"]),
            models.Index(fields=["provider", "provider_event_id"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self):
        return f"{self.provider} {self.event_type} ({self.status})"
