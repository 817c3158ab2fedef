"""
Django admin configuration for webhooks app.
"""
from django.contrib import admin
from django.utils.html import format_html

from webhooks.infrastructure.models import WebhookLog

STATUS_COLORS = {"pending": "orange", "processed": "green", "failed": "red"}


@admin.register(WebhookLog)
class WebhookLogAdmin(admin.ModelAdmin):
    """Admin interface for WebhookLog model. Logs are read-only here."""

    list_display = [
        "id",
        "provider",
        "event_type",
        "status_display",
        "attempts",
        "created_at",
        "processed_at",
    ]
    list_filter = ["provider", "status", "event_type", "created_at"]
    search_fields = ["id", "event_type", "provider_event_id", "error_message"]
    readonly_fields = [
        "id",
        "provider",
        "event_type",
        "payload",
        "provider_event_id",
        "status",
        "error_message",
        "processing_started_at",
        "processed_at",
        "attempts",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "created_at"

    def status_display(self, obj):
        return format_html(
            '<span style="color: {};">{}</span>',
            STATUS_COLORS.get(obj.status, "black"),
            obj.status,
        )

    status_display.short_description = "Status"

    def has_add_permission(self, request):
        return False
