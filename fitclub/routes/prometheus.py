# fitclub/routes/prometheus.py
"""
Prometheus metrics endpoint for monitoring infrastructure.

This is a PUBLIC endpoint (no club headers required) following standard
Prometheus practices. It exposes the service timings collected by
@measure_operation and the admission and lock counters.
"""

from fastapi import APIRouter, Response

from ..monitoring.prometheus_metrics import prometheus_metrics

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
def get_metrics() -> Response:
    """Render the FitClub registry in Prometheus exposition format."""
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
    )
