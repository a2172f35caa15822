"""GraphQL playground and execution endpoints.

Both live on the same path: GET serves the playground page, POST executes
a GraphQL request against the shared schema.
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from opentelemetry.trace import SpanKind
from strawberry.types import ExecutionResult

from outpost.api.dependencies import SchemaDep
from outpost.api.models.graphql import GraphQLRequest
from outpost.config.models.api import GraphQLConfig
from outpost.graphql.playground import playground_html
from outpost.observability.logging import get_logger
from outpost.observability.tracing import (
    create_span,
    format_trace_id,
    set_span_attributes,
)

logger = get_logger(__name__)


def build_response(result: ExecutionResult, trace_id: str) -> dict[str, Any]:
    """Build the GraphQL response envelope with the traceId extension."""
    body: dict[str, Any] = {"data": result.data}
    if result.errors:
        body["errors"] = [error.formatted for error in result.errors]

    extensions = dict(result.extensions or {})
    extensions["traceId"] = trace_id
    body["extensions"] = extensions

    return body


def create_graphql_router(config: GraphQLConfig | None = None) -> APIRouter:
    """Create the router serving the playground and execution endpoints.

    Args:
        config: GraphQL endpoint configuration (defaults if omitted)

    Returns:
        APIRouter with the GraphQL routes
    """
    config = config or GraphQLConfig()
    router = APIRouter()

    if config.playground_enabled:
        page = playground_html(
            endpoint=config.path,
            subscription_endpoint=config.subscription_endpoint,
            title=config.playground_title,
        )

        @router.get(config.path, response_class=HTMLResponse)
        async def graphql_playground() -> HTMLResponse:
            """Serve the GraphQL Playground page."""
            return HTMLResponse(page)

    @router.post(config.path)
    async def graphql_handler(
        payload: GraphQLRequest,
        request: Request,
        schema: SchemaDep,
    ) -> JSONResponse:
        """Execute a GraphQL request inside a traced span.

        Execution errors are returned in the envelope's ``errors`` list with
        HTTP 200.
        """
        with create_span("graphql_execution", kind=SpanKind.INTERNAL) as span:
            set_span_attributes(
                span,
                **{"graphql.operation.name": payload.operation_name},
            )

            result = await schema.execute(
                payload.query,
                variable_values=payload.variables,
                context_value={"request": request},
                operation_name=payload.operation_name,
            )

            if result.errors:
                span.set_attribute("graphql.error_count", len(result.errors))
                logger.info(
                    "graphql_execution_errors",
                    operation_name=payload.operation_name,
                    error_count=len(result.errors),
                )

            trace_id = format_trace_id(span)

        return JSONResponse(build_response(result, trace_id))

    return router
