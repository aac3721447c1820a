"""
Health Check Route

Liveness endpoint, also served at the API root.
"""

from fastapi import APIRouter

from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])

SERVICE_NAME = "threadline-api"
API_VERSION = "v1"


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the service is up. Touches no config or anchor state."""
    return HealthResponse(ok=True, service=SERVICE_NAME, version=API_VERSION)
