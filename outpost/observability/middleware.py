"""HTTP middleware for observability.

RequestLoggingMiddleware binds per-request context to structlog contextvars.
MetricsMiddleware times every routed request and records it on the
application's MetricsRecorder.
"""

import time
import uuid
from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Scope
from structlog.contextvars import bind_contextvars, clear_contextvars

from outpost.observability.logging import get_logger
from outpost.observability.metrics import MetricsRecorder
from outpost.observability.tracing import get_current_trace_id

logger = get_logger(__name__)


def route_path(scope: Scope) -> str | None:
    """Template of the route the router resolved for a request.

    Only meaningful once the request has passed through the router. None
    when no route matched.
    """
    route = scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request context to structlog contextvars.

    Headers:
        X-Request-ID: Caller-supplied request identifier (generated if absent)
        X-Trace-ID: Caller trace identifier, used when no span is active
        traceparent: W3C trace context (last fallback for trace_id)

    The active span's trace id always wins; a differing caller value is
    bound separately as ``client_trace_id``.
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request and bind logging context."""
        clear_contextvars()

        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        client_trace_id = request.headers.get("X-Trace-ID")
        trace_id = (
            get_current_trace_id()
            or client_trace_id
            or self._extract_trace_id(request.headers.get("traceparent"))
        )

        context: dict[str, Any] = {"request_id": request_id, "trace_id": trace_id}
        if client_trace_id and client_trace_id != trace_id:
            context["client_trace_id"] = client_trace_id
        bind_contextvars(**context)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)  # type: ignore[misc]

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

        response.headers["X-Request-ID"] = request_id
        if trace_id:
            response.headers["X-Trace-ID"] = trace_id
        return response  # type: ignore[no-any-return]

    @staticmethod
    def _extract_trace_id(traceparent: str | None) -> str | None:
        """Extract trace_id from W3C traceparent header.

        Format: version-trace_id-parent_id-trace_flags
        Example: 00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01
        """
        if not traceparent:
            return None
        parts = traceparent.split("-")
        return parts[1] if len(parts) >= 2 else None


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware that records request count and latency per route.

    Requests are labelled with the route template the router resolved.
    Requests no route matched, and requests to excluded paths (by default
    the metrics route itself), are not recorded, so label values stay
    bounded by the route table.
    """

    def __init__(
        self,
        app: ASGIApp,
        recorder: MetricsRecorder,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self.recorder = recorder
        self.exclude_paths = frozenset(exclude_paths)

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Time the request and record it."""
        if request.url.path in self.exclude_paths:
            return await call_next(request)  # type: ignore[misc,no-any-return]

        start = time.perf_counter()
        try:
            response = await call_next(request)  # type: ignore[misc]
        except Exception:
            self._record(request, 500, time.perf_counter() - start)
            raise

        self._record(request, response.status_code, time.perf_counter() - start)
        return response  # type: ignore[no-any-return]

    def _record(self, request: Request, status: int, duration: float) -> None:
        # The router stores the matched route in the shared scope
        path = route_path(request.scope)
        if path is None:
            return
        self.recorder.record(request.method, path, status, duration)
