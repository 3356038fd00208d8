"""Health check endpoint for Ballotbox API."""

from fastapi import APIRouter

from ballotbox.api.models.health import HealthResponse

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return health status."""
    return HealthResponse(status="healthy")
