"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import strawberry
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

import outpost
from outpost.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from outpost.api.routes import register_routes
from outpost.config import get_settings
from outpost.config.settings import Settings
from outpost.graphql.schema import build_schema
from outpost.observability.logging import get_logger
from outpost.observability.metrics import MetricsRecorder
from outpost.observability.middleware import MetricsMiddleware, RequestLoggingMiddleware
from outpost.observability.tracing import TracingHandle

logger = get_logger(__name__)

HTTP_ERROR_CODES: dict[int, ErrorCode] = {
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup; flush the tracing pipeline on shutdown.

    The server runs the shutdown half after in-flight requests have drained.
    """
    logger.info("server_started", app_name=app.state.settings.app_name)
    yield
    tracing: TracingHandle | None = app.state.tracing
    if tracing is not None:
        tracing.shutdown()
    logger.info("server_stopped", app_name=app.state.settings.app_name)


def create_app(
    settings: Settings | None = None,
    *,
    schema: strawberry.Schema | None = None,
    metrics: MetricsRecorder | None = None,
    tracing: TracingHandle | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The caller may pass the schema, metrics recorder and tracing handle it
    owns; missing ones are built here with default configuration.

    Args:
        settings: Application settings (loaded from config if omitted)
        schema: Shared GraphQL schema
        metrics: Metrics recorder backing the request middleware and /metrics
        tracing: Installed tracing pipeline, None when export is disabled

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    metrics_config = settings.observability.metrics

    app = FastAPI(
        title="Outpost",
        description="Health, GraphQL and metrics service skeleton",
        version=outpost.__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.schema = schema if schema is not None else build_schema()
    app.state.metrics = (
        metrics if metrics is not None else MetricsRecorder(buckets=metrics_config.buckets)
    )
    app.state.tracing = tracing

    # Added innermost first: logging wraps metrics wraps the routes
    if metrics_config.enabled:
        app.add_middleware(
            MetricsMiddleware,
            recorder=app.state.metrics,
            exclude_paths=[] if metrics_config.track_metrics_endpoint else [metrics_config.path],
        )
    app.add_middleware(RequestLoggingMiddleware)

    _register_exception_handlers(app)

    register_routes(app, settings)

    if tracing is not None:
        FastAPIInstrumentor.instrument_app(app, tracer_provider=tracing.provider)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        debug=settings.debug,
        metrics_enabled=metrics_config.enabled,
        tracing_enabled=tracing is not None,
    )

    return app


def _error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    response = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", exclude_none=True),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle routing and HTTP errors raised by handlers."""
        logger.info(
            "http_error",
            status_code=exc.status_code,
            path=request.url.path,
        )

        code = HTTP_ERROR_CODES.get(
            exc.status_code,
            ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.INVALID_REQUEST,
        )
        response = _error_response(exc.status_code, code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
        )

        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]

        return _error_response(
            400, ErrorCode.INVALID_REQUEST, "Request validation failed", details
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        logger.warning(
            "pydantic_validation_error",
            errors=exc.errors(),
            path=request.url.path,
        )

        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]

        return _error_response(
            400, ErrorCode.INVALID_REQUEST, "Data validation failed", details
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        return _error_response(
            500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred"
        )

    logger.debug("exception_handlers_registered")
