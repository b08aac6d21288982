"""Prometheus Metrics.

This module defines and exports Prometheus metrics for monitoring the application.
Metrics include counters and histograms for tracking:
- API requests and responses
- Upstream employee directory calls
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

from .constants import Metrics
from .logging import note_upstream_call

# ========================================
# API Metrics
# ========================================

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_request_upstream_calls = Histogram(
    'http_request_upstream_calls',
    'Upstream calls made while serving one HTTP request',
    ['method', 'endpoint'],
    buckets=(0, 1, 2, 3, 5)
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'Number of HTTP requests currently being processed',
    ['method', 'endpoint']
)

# ========================================
# Upstream Metrics
# ========================================

upstream_requests_total = Counter(
    'upstream_requests_total',
    'Total requests to the upstream employee directory',
    ['operation', 'outcome']
)

upstream_request_duration_seconds = Histogram(
    'upstream_request_duration_seconds',
    'Upstream employee directory request duration in seconds',
    ['operation'],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)
)

# ========================================
# Application Info
# ========================================

app_info = Info(
    'app',
    'Application information'
)


def set_app_info(version: str, environment: str):
    """Set application information for Prometheus.

    Call this during app startup.
    """
    app_info.info({
        'version': version,
        'environment': environment,
        'service': Metrics.SERVICE_NAME
    })


def record_upstream_call(operation: str, outcome: str, duration: float):
    """Record one upstream call in the counter, the latency histogram and
    the current request's upstream trace.
    """
    upstream_requests_total.labels(operation=operation, outcome=outcome).inc()
    upstream_request_duration_seconds.labels(operation=operation).observe(duration)
    note_upstream_call(operation, outcome, duration)


def get_metrics():
    """Get current Prometheus metrics in text format.

    Use this for the /metrics endpoint.
    """
    return generate_latest()


def get_content_type():
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST
