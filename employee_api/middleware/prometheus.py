"""Prometheus Middleware.

Records request counts, latency and upstream fan-out per endpoint.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..core.constants import HttpStatusCodes
from ..core.logging import upstream_trace_var
from ..core.metrics import (
    http_request_duration_seconds,
    http_request_upstream_calls,
    http_requests_in_progress,
    http_requests_total,
)
from ..utils import normalize_path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to capture Prometheus metrics for HTTP requests.

    Endpoint labels use the normalized path so employee ids and search
    terms do not each become their own series. The upstream call count is
    read from the trace RequestIDMiddleware starts, so this middleware
    must sit inside it.
    """

    async def dispatch(self, request: Request, call_next):
        labels = {
            'method': request.method,
            'endpoint': normalize_path(request.url.path)
        }
        in_progress = http_requests_in_progress.labels(**labels)
        in_progress.inc()

        start_time = time.time()
        status_code = HttpStatusCodes.INTERNAL_SERVER_ERROR

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_total.labels(status_code=status_code, **labels).inc()
            http_request_duration_seconds.labels(**labels).observe(time.time() - start_time)

            trace = upstream_trace_var.get()
            if trace is not None:
                http_request_upstream_calls.labels(**labels).observe(trace.call_count)

            in_progress.dec()
