"""
Prometheus metrics for the key service.

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

# Key lifecycle metrics
keys_generated_total = Counter(
    "keys_generated_total",
    "Total keys generated",
    ["role"],
)

keys_activated_total = Counter(
    "keys_activated_total",
    "Total successful key activations",
)

key_activation_failures_total = Counter(
    "key_activation_failures_total",
    "Total rejected key activations",
    ["reason"],
)

key_verifications_total = Counter(
    "key_verifications_total",
    "Total key verifications",
    ["outcome"],
)

keys_deleted_total = Counter(
    "keys_deleted_total",
    "Total keys deleted",
    ["scope"],
)

# Ledger metrics
moderator_debt_charged_total = Counter(
    "moderator_debt_charged_total",
    "Total amount charged to moderators",
)

# Dependency metrics
time_source_fallbacks_total = Counter(
    "time_source_fallbacks_total",
    "Times the external time service failed and the local clock was used",
    ["reason"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
