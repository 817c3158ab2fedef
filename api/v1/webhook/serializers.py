"""
Serializers for the webhook receiver endpoint.
"""

from rest_framework import serializers


class WebhookReceivedResponseSerializer(serializers.Serializer):
    """Serializer for webhook acknowledgement."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    webhookId = serializers.UUIDField()
