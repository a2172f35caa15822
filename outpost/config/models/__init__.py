"""Configuration models for Outpost."""

from outpost.config.models.api import APIConfig, GraphQLConfig
from outpost.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)

__all__ = [
    "APIConfig",
    "GraphQLConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "TracingConfig",
]
