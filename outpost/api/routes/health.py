"""Health check endpoint."""

from fastapi import APIRouter

from outpost.api.models.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report liveness.

    Always healthy: the endpoint consults no inputs and cannot fail.
    """
    return HealthResponse(healthy=True)
