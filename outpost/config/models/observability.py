"""Observability configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Log level")
    format: LogFormat = Field(default="console", description="Output format")
    include_trace_id: bool = Field(
        default=True,
        description="Include trace ID in logs",
    )


class TracingConfig(BaseModel):
    """Distributed tracing configuration.

    Export is enabled only when an OTLP endpoint is known (here or through
    OTEL_EXPORTER_OTLP_ENDPOINT) or console export is requested.
    """

    service_name: str = Field(default="outpost", description="Service name for traces")
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC exporter endpoint",
    )
    console_export: bool = Field(
        default=False,
        description="Also export spans to stdout",
    )


class MetricsConfig(BaseModel):
    """Metrics configuration."""

    enabled: bool = Field(default=True, description="Enable request metrics and the metrics route")
    path: str = Field(default="/metrics", description="Metrics endpoint path")
    track_metrics_endpoint: bool = Field(
        default=False,
        description="Count requests to the metrics endpoint itself",
    )
    buckets: list[float] = Field(
        default=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        description="Request duration histogram buckets in seconds",
    )

    @field_validator("buckets")
    @classmethod
    def sort_buckets(cls, v: list[float]) -> list[float]:
        """Histogram buckets must be strictly increasing."""
        if not v:
            raise ValueError("at least one bucket is required")
        return sorted(set(v))


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )
    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="Tracing settings",
    )
    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Metrics settings",
    )
