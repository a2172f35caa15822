"""Dependency injection for API routes.

The schema and metrics recorder are built once by the entry point and
attached to ``app.state`` by ``create_app``. Handlers declare them as
dependencies; tests can swap them through ``app.dependency_overrides``.
"""

from typing import Annotated

import strawberry
from fastapi import Depends, Request

from outpost.observability.metrics import MetricsRecorder


def get_schema(request: Request) -> strawberry.Schema:
    """Get the shared, read-only GraphQL schema."""
    schema: strawberry.Schema = request.app.state.schema
    return schema


def get_metrics(request: Request) -> MetricsRecorder:
    """Get the application's metrics recorder."""
    metrics: MetricsRecorder = request.app.state.metrics
    return metrics


SchemaDep = Annotated[strawberry.Schema, Depends(get_schema)]
MetricsDep = Annotated[MetricsRecorder, Depends(get_metrics)]
