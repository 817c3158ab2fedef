"""
Model registration for the webhooks app.
"""
from webhooks.infrastructure.models import WebhookLog  # noqa: F401
