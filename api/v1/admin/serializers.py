"""
Serializers for admin API endpoints.
"""

from rest_framework import serializers

from api.v1.license.serializers import ActivationSerializer

LICENSE_STATUSES = ["pending", "active", "expired", "revoked"]
WEBHOOK_STATUSES = ["pending", "processed", "failed"]


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    product_id = serializers.UUIDField()
    customer_id = serializers.UUIDField()
    expires_on = serializers.DateTimeField(required=False, allow_null=True)
    max_activations = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    status = serializers.CharField(required=False, default="active")
    key = serializers.CharField(required=False, allow_null=True, max_length=64)


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for partial license update; expires_on null removes the expiry."""

    product_id = serializers.UUIDField(required=False)
    customer_id = serializers.UUIDField(required=False)
    expires_on = serializers.DateTimeField(required=False, allow_null=True)
    max_activations = serializers.IntegerField(required=False, min_value=1)


class UpdateLicenseStatusRequestSerializer(serializers.Serializer):
    """Serializer for license status overwrite."""

    status = serializers.CharField()


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    product_id = serializers.UUIDField()
    customer_id = serializers.UUIDField()
    status = serializers.CharField()
    is_valid = serializers.BooleanField()
    max_activations = serializers.IntegerField()
    activation_count = serializers.IntegerField()
    usage = serializers.CharField()
    activated_on = serializers.DateTimeField(allow_null=True)
    expires_on = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    activations = ActivationSerializer(many=True)


class LicenseListQuerySerializer(serializers.Serializer):
    """Query parameters for the admin license listing."""

    status = serializers.ChoiceField(choices=LICENSE_STATUSES, required=False)
    customer_id = serializers.UUIDField(required=False)
    product_id = serializers.UUIDField(required=False)
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=50, min_value=1)


class PaginationSerializer(serializers.Serializer):
    """Pagination block of list responses."""

    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total = serializers.IntegerField()
    pages = serializers.IntegerField()


class WebhookLogListQuerySerializer(serializers.Serializer):
    """Query parameters for the admin webhook listing."""

    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=50, min_value=1)
    provider = serializers.CharField(required=False)
    status = serializers.ChoiceField(choices=WEBHOOK_STATUSES, required=False)
    eventType = serializers.CharField(required=False)


class WebhookLogSerializer(serializers.Serializer):
    """Serializer for WebhookLogDTO."""

    id = serializers.UUIDField()
    provider = serializers.CharField()
    event_type = serializers.CharField()
    payload = serializers.JSONField()
    provider_event_id = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    error_message = serializers.CharField(allow_null=True)
    attempts = serializers.IntegerField()
    processed_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class WebhookStatsResponseSerializer(serializers.Serializer):
    """Serializer for webhook statistics."""

    success = serializers.BooleanField()
    total = serializers.IntegerField()
    last24Hours = serializers.IntegerField()
    byProviderAndStatus = serializers.ListField(child=serializers.DictField())
