"""OpenTelemetry distributed tracing setup.

Trace export is optional: it is enabled at startup when an OTLP endpoint is
configured (or console export is requested) and stays off otherwise. The
entry point owns the returned handle and shuts it down on exit so buffered
spans are flushed.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.trace import Span, SpanKind, Tracer

from outpost.config.models.observability import TracingConfig
from outpost.observability.logging import get_logger

logger = get_logger(__name__)

# Tracer of the active handle, None while tracing is disabled
_tracer: Tracer | None = None


@dataclass
class TracingHandle:
    """Installed tracing pipeline owned by the process entry point."""

    provider: TracerProvider
    tracer: Tracer
    _closed: bool = field(default=False, init=False, repr=False)

    def shutdown(self) -> None:
        """Flush buffered spans and stop the exporters.

        Safe to call more than once.
        """
        global _tracer
        if self._closed:
            return
        self._closed = True
        self.provider.force_flush()
        self.provider.shutdown()
        if _tracer is self.tracer:
            _tracer = None
        logger.info("tracing_shutdown")


def setup_tracing(
    config: TracingConfig,
    exporter: SpanExporter | None = None,
) -> TracingHandle | None:
    """Initialize OpenTelemetry tracing if export is configured.

    Args:
        config: Tracing configuration
        exporter: Extra span exporter to install (used by tests)

    Returns:
        TracingHandle, or None when no exporter is configured
    """
    global _tracer

    endpoint = config.otlp_endpoint or os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")

    exporters: list[SpanExporter] = []
    if endpoint:
        exporters.append(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    if config.console_export:
        exporters.append(ConsoleSpanExporter())
    if exporter is not None:
        exporters.append(exporter)

    if not exporters:
        logger.info("tracing_disabled", reason="no exporter configured")
        return None

    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: config.service_name})
    )
    for span_exporter in exporters:
        provider.add_span_processor(BatchSpanProcessor(span_exporter))

    trace.set_tracer_provider(provider)

    _tracer = provider.get_tracer(config.service_name)

    logger.info(
        "tracing_enabled",
        service_name=config.service_name,
        otlp_endpoint=endpoint,
        console_export=config.console_export,
    )

    return TracingHandle(provider=provider, tracer=_tracer)


def get_tracer() -> Tracer:
    """Get the configured tracer, or a no-op tracer while tracing is disabled."""
    if _tracer is None:
        return trace.NoOpTracer()
    return _tracer


def format_trace_id(span: Span) -> str:
    """Format the trace id of a span as 32 hex digits.

    Non-recording spans of a disabled pipeline yield all zeros.
    """
    return format(span.get_span_context().trace_id, "032x")


def get_current_trace_id() -> str | None:
    """Get the current trace ID as a hex string.

    Returns:
        Trace ID or None if not in a trace
    """
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        return format(span.get_span_context().trace_id, "032x")
    return None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
    context: Context | None = None,
) -> Generator[Span, None, None]:
    """Create a new span as a context manager.

    Args:
        name: Span name
        kind: Span kind (INTERNAL, SERVER, CLIENT, etc.)
        attributes: Initial span attributes
        context: Parent context (current if not specified)

    Yields:
        The created span
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name,
        kind=kind,
        attributes=attributes or {},
        context=context,
    ) as span:
        yield span


def set_span_attributes(span: Span, **attributes: Any) -> None:
    """Set multiple attributes on a span, skipping None values."""
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(key, value)
