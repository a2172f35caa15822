"""Tests for OpenTelemetry tracing."""

from collections.abc import Generator

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind

from outpost.config.models.observability import TracingConfig
from outpost.observability import tracing
from outpost.observability.tracing import (
    TracingHandle,
    create_span,
    format_trace_id,
    get_current_trace_id,
    get_tracer,
    set_span_attributes,
    setup_tracing,
)

ZERO_TRACE_ID = "0" * 32


@pytest.fixture
def exporter() -> InMemorySpanExporter:
    """In-memory span exporter."""
    return InMemorySpanExporter()


@pytest.fixture
def handle(exporter: InMemorySpanExporter) -> Generator[TracingHandle, None, None]:
    """Tracing pipeline exporting to memory, shut down after the test."""
    handle = setup_tracing(TracingConfig(service_name="test-service"), exporter=exporter)
    assert handle is not None
    yield handle
    handle.shutdown()


class TestSetupTracing:
    """Tests for tracing setup."""

    def test_disabled_without_exporter(self) -> None:
        """No endpoint and no exporter means tracing stays off."""
        assert setup_tracing(TracingConfig()) is None
        assert tracing._tracer is None

    def test_enabled_with_exporter(self, handle: TracingHandle) -> None:
        """An exporter installs a provider and tracer."""
        assert handle.provider is not None
        assert get_tracer() is handle.tracer

    def test_service_name_on_resource(self, handle: TracingHandle) -> None:
        """The service name is attached to the provider resource."""
        assert handle.provider.resource.attributes["service.name"] == "test-service"

    def test_endpoint_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """OTEL_EXPORTER_OTLP_ENDPOINT enables OTLP export."""
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")

        handle = setup_tracing(TracingConfig())
        try:
            assert handle is not None
        finally:
            if handle is not None:
                handle.shutdown()

    def test_shutdown_flushes_spans(self, exporter: InMemorySpanExporter) -> None:
        """Buffered spans are exported on shutdown."""
        handle = setup_tracing(TracingConfig(), exporter=exporter)
        assert handle is not None

        with create_span("buffered"):
            pass
        handle.shutdown()

        assert [span.name for span in exporter.get_finished_spans()] == ["buffered"]

    def test_shutdown_detaches_tracer(self, exporter: InMemorySpanExporter) -> None:
        """After shutdown the module falls back to the no-op tracer."""
        handle = setup_tracing(TracingConfig(), exporter=exporter)
        assert handle is not None

        handle.shutdown()

        assert tracing._tracer is None

    def test_shutdown_is_idempotent(self, exporter: InMemorySpanExporter) -> None:
        """Calling shutdown twice does not raise."""
        handle = setup_tracing(TracingConfig(), exporter=exporter)
        assert handle is not None

        handle.shutdown()
        handle.shutdown()


class TestCreateSpan:
    """Tests for span creation."""

    def test_span_is_recording_when_enabled(self, handle: TracingHandle) -> None:
        """Spans of an installed pipeline record."""
        with create_span("test-span") as span:
            assert span.is_recording()

    def test_span_kind(self, handle: TracingHandle) -> None:
        """Span kind is applied."""
        with create_span("test-span", kind=SpanKind.CLIENT) as span:
            assert span.kind == SpanKind.CLIENT

    def test_span_is_non_recording_when_disabled(self) -> None:
        """Without a pipeline spans are no-ops."""
        assert tracing._tracer is None
        with create_span("noop") as span:
            assert not span.is_recording()

    def test_attributes_exported(
        self, handle: TracingHandle, exporter: InMemorySpanExporter
    ) -> None:
        """Initial and added attributes end up on the exported span."""
        with create_span("attrs", attributes={"initial": "yes"}) as span:
            set_span_attributes(span, added=1, skipped=None)

        handle.provider.force_flush()
        (exported,) = exporter.get_finished_spans()
        assert exported.attributes["initial"] == "yes"
        assert exported.attributes["added"] == 1
        assert "skipped" not in exported.attributes


class TestTraceIds:
    """Tests for trace id formatting."""

    def test_format_trace_id_enabled(self, handle: TracingHandle) -> None:
        """Recording spans have a non-zero 32 hex digit id."""
        with create_span("ids") as span:
            trace_id = format_trace_id(span)

        assert len(trace_id) == 32
        assert trace_id != ZERO_TRACE_ID
        int(trace_id, 16)

    def test_format_trace_id_disabled(self) -> None:
        """No-op spans format as all zeros."""
        with create_span("noop") as span:
            assert format_trace_id(span) == ZERO_TRACE_ID

    def test_current_trace_id_inside_span(self, handle: TracingHandle) -> None:
        """The current trace id matches the active span."""
        with create_span("current") as span:
            assert get_current_trace_id() == format_trace_id(span)

    def test_current_trace_id_outside_span(self) -> None:
        """No valid span means no trace id."""
        assert get_current_trace_id() is None
