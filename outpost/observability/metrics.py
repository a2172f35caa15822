"""Prometheus metrics for Outpost.

A MetricsRecorder owns its own CollectorRegistry so the entry point (and
each test) controls the lifetime of the request counters instead of sharing
the process-global default registry.
"""

from collections.abc import Sequence

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0,
)

REQUEST_LABELS = ["method", "path", "status"]


class MetricsRecorder:
    """Per-request counter and latency histogram rendered for scraping."""

    content_type: str = CONTENT_TYPE_LATEST

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        buckets: Sequence[float] = DEFAULT_BUCKETS,
    ) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests processed",
            labelnames=REQUEST_LABELS,
            registry=self.registry,
        )

        self.request_duration = Histogram(
            "http_requests_duration_seconds",
            "HTTP request latency in seconds",
            labelnames=REQUEST_LABELS,
            buckets=tuple(buckets),
            registry=self.registry,
        )

    def record(self, method: str, path: str, status: int, duration: float) -> None:
        """Record one finished request."""
        labels = {"method": method, "path": path, "status": str(status)}
        self.requests_total.labels(**labels).inc()
        self.request_duration.labels(**labels).observe(duration)

    def request_count(self, method: str, path: str, status: int) -> float:
        """Current value of the request counter for one label combination."""
        value = self.registry.get_sample_value(
            "http_requests_total",
            {"method": method, "path": path, "status": str(status)},
        )
        return value or 0.0

    def render(self) -> bytes:
        """Render the registry in Prometheus text exposition format."""
        return generate_latest(self.registry)
