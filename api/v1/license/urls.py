"""
URL configuration for license API endpoints.
"""

from django.urls import path, re_path

from api.v1.license import views

urlpatterns = [
    re_path(
        r"^license/verify/(?P<key>.*)$",
        views.VerifyLicenseView.as_view(),
        name="verify-license",
    ),
    path(
        "license/<uuid:license_id>/activations",
        views.ActivationsView.as_view(),
        name="license-activations",
    ),
    path(
        "license/<uuid:license_id>/activations/<uuid:activation_id>",
        views.ActivationDetailView.as_view(),
        name="license-activation-detail",
    ),
    path(
        "user/licenses",
        views.CustomerLicensesView.as_view(),
        name="customer-licenses",
    ),
]
