"""
Serializers for the public and owner license endpoints.
"""

from rest_framework import serializers


class VerifyLicenseResponseSerializer(serializers.Serializer):
    """Serializer for license verification response."""

    success = serializers.BooleanField()
    valid = serializers.BooleanField()
    message = serializers.CharField()
    status = serializers.CharField()


class AddActivationRequestSerializer(serializers.Serializer):
    """Serializer for add activation request."""

    domain = serializers.CharField(required=False, allow_blank=True, max_length=253)
    ipAddress = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=45
    )


class ActivationSerializer(serializers.Serializer):
    """Serializer for ActivationDTO."""

    id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    domain = serializers.CharField()
    ip_address = serializers.CharField(allow_null=True)
    activated_at = serializers.DateTimeField()


class AddActivationResponseSerializer(serializers.Serializer):
    """Serializer for add activation response."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    activation = ActivationSerializer()


class ActivationListResponseSerializer(serializers.Serializer):
    """Serializer for the activations of a license."""

    success = serializers.BooleanField()
    license_id = serializers.UUIDField()
    max_activations = serializers.IntegerField()
    usage = serializers.CharField()
    activations = ActivationSerializer(many=True)


class CustomerLicenseSerializer(serializers.Serializer):
    """Serializer for a license in the owner's list."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    product_id = serializers.UUIDField()
    status = serializers.CharField()
    is_valid = serializers.BooleanField()
    expires_on = serializers.DateTimeField(allow_null=True)
    usage = serializers.CharField()
    usage_percent = serializers.FloatField()


class CustomerLicenseListResponseSerializer(serializers.Serializer):
    """Serializer for the owner's license list."""

    success = serializers.BooleanField()
    licenses = CustomerLicenseSerializer(many=True)
