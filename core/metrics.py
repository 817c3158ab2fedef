"""
Prometheus metrics for the licensing service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["status"],
)

license_status_changes_total = Counter(
    "license_status_changes_total",
    "Total license status overwrites",
    ["new_status"],
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Total licenses marked expired by reconciliation",
)

license_verifications_total = Counter(
    "license_verifications_total",
    "Total license verification requests",
    ["result"],
)

# Activation metrics
activations_created_total = Counter(
    "activations_created_total",
    "Total activations created",
)

activations_removed_total = Counter(
    "activations_removed_total",
    "Total activations removed",
)

activation_quota_rejections_total = Counter(
    "activation_quota_rejections_total",
    "Total activations rejected by the activation limit",
)

# Webhook metrics
webhooks_received_total = Counter(
    "webhooks_received_total",
    "Total webhooks received",
    ["provider", "event_type"],
)

webhooks_processed_total = Counter(
    "webhooks_processed_total",
    "Total webhooks processed",
    ["provider", "event_type", "outcome"],
)

webhook_processing_duration_seconds = Histogram(
    "webhook_processing_duration_seconds",
    "Webhook processing duration in seconds",
    ["provider"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

# Email metrics
emails_sent_total = Counter(
    "emails_sent_total",
    "Total notification emails attempted",
    ["template", "outcome"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
