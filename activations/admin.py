"""
Django admin configuration for activations app.

Activations are created only through the activation endpoints, which
enforce the activation limit and the domain format. The admin can
inspect and delete them.
"""

from django.contrib import admin

from activations.infrastructure.models import Activation


@admin.register(Activation)
class ActivationAdmin(admin.ModelAdmin):
    """Read-only admin interface for Activation model."""

    list_display = ["license", "domain", "ip_address", "activated_at"]
    list_filter = ["activated_at", "license__product"]
    search_fields = ["domain", "ip_address", "license__key", "license__customer__email"]
    readonly_fields = ["id", "license", "domain", "ip_address", "activated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license", "domain", "ip_address"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("activated_at",),
            },
        ),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")
