"""Health check response model."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness payload.

    Example:
        {"healthy": true}
    """

    healthy: bool = True
