"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "admin/licenses",
        views.LicenseCollectionView.as_view(),
        name="admin-licenses",
    ),
    path(
        "admin/licenses/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="admin-license-detail",
    ),
    path(
        "admin/licenses/<uuid:license_id>/reset",
        views.ResetLicenseView.as_view(),
        name="admin-license-reset",
    ),
    path(
        "admin/licenses/<uuid:license_id>/status",
        views.LicenseStatusView.as_view(),
        name="admin-license-status",
    ),
    path(
        "admin/webhooks",
        views.WebhookLogListView.as_view(),
        name="admin-webhooks",
    ),
    path(
        "admin/webhooks/retry/<uuid:log_id>",
        views.WebhookRetryView.as_view(),
        name="admin-webhook-retry",
    ),
    path(
        "admin/webhooks/clear",
        views.WebhookClearView.as_view(),
        name="admin-webhook-clear",
    ),
    path(
        "admin/webhooks/stats",
        views.WebhookStatsView.as_view(),
        name="admin-webhook-stats",
    ),
]
