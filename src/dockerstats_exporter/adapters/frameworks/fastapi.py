"""FastAPI adapter for the metrics endpoint."""

from fastapi import APIRouter, Response

from dockerstats_exporter.core.encoding.prometheus import CONTENT_TYPE, encode_readings
from dockerstats_exporter.core.ports import MetricsSnapshotPort


def create_metrics_router(store: MetricsSnapshotPort) -> APIRouter:
    """Create a FastAPI router with a /metrics endpoint.

    Args:
        store: Store implementing MetricsSnapshotPort.

    Returns:
        APIRouter with /metrics configured.
    """
    router = APIRouter()

    @router.get("/metrics")
    async def get_metrics() -> Response:
        """Return container metrics in Prometheus text format."""
        body = encode_readings(store.snapshot())
        return Response(content=body, media_type=CONTENT_TYPE)

    return router
