"""API route registration.

This module provides helper functions for registering API routers
with the FastAPI application.
"""

from fastapi import FastAPI

from outpost.config.settings import Settings
from outpost.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Settings deciding which optional routes are mounted
    """
    from outpost.api.routes.graphql import create_graphql_router
    from outpost.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    app.include_router(create_graphql_router(settings.graphql), tags=["GraphQL"])

    routes = ["/health", settings.graphql.path]

    metrics_config = settings.observability.metrics
    if metrics_config.enabled:
        from outpost.api.routes.metrics import create_metrics_router

        app.include_router(create_metrics_router(metrics_config.path), tags=["Metrics"])
        routes.append(metrics_config.path)

    logger.info("routes_registered", routes=routes)
