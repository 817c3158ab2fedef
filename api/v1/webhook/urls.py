"""
URL configuration for webhook receiver endpoints.
"""

from django.urls import path

from api.v1.webhook import views

urlpatterns = [
    path(
        "webhooks/<str:provider>",
        views.WebhookReceiverView.as_view(),
        name="receive-webhook",
    ),
]
