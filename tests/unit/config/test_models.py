"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from outpost.config.models import APIConfig, GraphQLConfig, MetricsConfig


class TestAPIConfig:
    """Tests for APIConfig."""

    def test_port_range_enforced(self) -> None:
        """Ports outside 1-65535 are rejected."""
        with pytest.raises(ValidationError):
            APIConfig(port=0)
        with pytest.raises(ValidationError):
            APIConfig(port=70000)

    def test_negative_shutdown_timeout_rejected(self) -> None:
        """Shutdown timeout cannot be negative."""
        with pytest.raises(ValidationError):
            APIConfig(shutdown_timeout=-1)


class TestGraphQLConfig:
    """Tests for GraphQLConfig."""

    def test_paths_get_leading_slash(self) -> None:
        """Paths without a leading slash are normalized."""
        config = GraphQLConfig(path="graphql", subscription_endpoint="ws")
        assert config.path == "/graphql"
        assert config.subscription_endpoint == "/ws"


class TestMetricsConfig:
    """Tests for MetricsConfig."""

    def test_buckets_sorted_and_deduplicated(self) -> None:
        """Histogram buckets are normalized to increasing order."""
        config = MetricsConfig(buckets=[1.0, 0.1, 0.5, 0.1])
        assert config.buckets == [0.1, 0.5, 1.0]

    def test_empty_buckets_rejected(self) -> None:
        """At least one bucket is required."""
        with pytest.raises(ValidationError):
            MetricsConfig(buckets=[])
