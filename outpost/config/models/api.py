"""API server configuration models."""

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """Configuration for the HTTP API server."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Port number")
    shutdown_timeout: float | None = Field(
        default=None,
        ge=0.0,
        description="Seconds to wait for in-flight requests on shutdown (None waits for all)",
    )


class GraphQLConfig(BaseModel):
    """Configuration for the GraphQL endpoint and playground."""

    path: str = Field(default="/", description="Path serving the playground and execution endpoint")
    playground_enabled: bool = Field(default=True, description="Serve the playground on GET")
    playground_title: str = Field(
        default="Outpost GraphQL Playground",
        description="Title of the playground page",
    )
    subscription_endpoint: str = Field(
        default="/ws",
        description="Subscription endpoint advertised to the playground",
    )

    @field_validator("path", "subscription_endpoint")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        """Normalize paths to start with a slash."""
        return v if v.startswith("/") else f"/{v}"
