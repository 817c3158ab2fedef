"""
Django admin configuration for customers app.
"""

from django.contrib import admin

from customers.infrastructure.models import Customer, Subscription


class SubscriptionInline(admin.TabularInline):
    """Inline subscriptions on the customer page."""

    model = Subscription
    extra = 0
    readonly_fields = ["id", "created_at", "updated_at"]


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for Customer model."""

    list_display = ["username", "email", "chargebee_customer_id", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["username", "email", "chargebee_customer_id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [SubscriptionInline]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for Subscription model."""

    list_display = [
        "customer",
        "plan",
        "status",
        "current_period_end",
        "chargebee_subscription_id",
    ]
    list_filter = ["status", "plan", "created_at"]
    search_fields = ["customer__email", "customer__username", "chargebee_subscription_id"]
    readonly_fields = ["id", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("customer")
