"""Prometheus Metrics Endpoint.

Exposes application metrics in Prometheus format.
"""

from fastapi import APIRouter, Response

from ....core.constants import Metrics
from ....core.metrics import get_content_type, get_metrics

router = APIRouter()


@router.get(Metrics.ENDPOINT_PATH)
async def prometheus_metrics():
    """Expose Prometheus metrics.

    Scraped by a Prometheus server; includes upstream call counters
    (`upstream_requests_total`) and latencies.
    """
    return Response(
        content=get_metrics(),
        media_type=get_content_type()
    )
