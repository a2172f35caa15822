"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response

from outpost.api.dependencies import MetricsDep
from outpost.observability.logging import get_logger

logger = get_logger(__name__)


def create_metrics_router(path: str = "/metrics") -> APIRouter:
    """Create the router exposing the metrics registry at ``path``."""
    router = APIRouter()

    @router.get(path)
    async def get_metrics(metrics: MetricsDep) -> Response:
        """Get Prometheus metrics.

        Returns metrics in Prometheus text format for scraping.
        """
        logger.debug("metrics_request")

        return Response(
            content=metrics.render(),
            media_type=metrics.content_type,
        )

    return router
