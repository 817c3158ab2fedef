"""
Django admin configuration for licenses app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin
from django.utils.html import format_html

from licenses.domain.license_key import generate_unique_key
from licenses.infrastructure.models import AuditLog, License
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)

license_repository = DjangoLicenseRepository()


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "product",
        "customer",
        "status",
        "is_valid_display",
        "activation_usage",
        "expires_on",
        "created_at",
    ]
    list_filter = ["status", "product", "expires_on", "created_at"]
    search_fields = ["key", "customer__email", "customer__username", "product__name"]
    readonly_fields = ["id", "key", "activated_on", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "product", "customer"),
            },
        ),
        (
            "Status",
            {
                "fields": ("status", "max_activations", "activated_on", "expires_on"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def save_model(self, request, obj, form, change):
        """Generate the key of a license created here."""
        if not change and not obj.key:
            obj.key = async_to_sync(generate_unique_key)(license_repository)
        super().save_model(request, obj, form, change)

    def is_valid_display(self, obj):
        """Display validity with color."""
        if license_repository._to_domain(obj).is_valid():  # pylint: disable=protected-access
            return format_html('<span style="color: green;">✓ Valid</span>')
        return format_html('<span style="color: red;">✗ Invalid</span>')

    is_valid_display.short_description = "Valid"

    def activation_usage(self, obj):
        """Display activations used out of the limit."""
        return f"{obj.activations.count()}/{obj.max_activations}"

    activation_usage.short_description = "Activations"

    def get_queryset(self, request):
        """Optimize queryset."""
        return (
            super()
            .get_queryset(request)
            .select_related("product", "customer")
            .prefetch_related("activations")
        )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only admin interface for AuditLog model."""

    list_display = ["action", "entity_type", "entity_id", "actor", "created_at"]
    list_filter = ["action", "entity_type", "created_at"]
    search_fields = ["entity_id", "actor"]
    readonly_fields = ["id", "entity_type", "entity_id", "action", "changes", "actor", "created_at"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
