"""
Health Routes
=============

FastAPI route for the health check endpoint.
"""

from fastapi import APIRouter

from carousel_renderer.config.settings import get_settings
from carousel_renderer.models.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Static readiness payload. Never touches the browser."""
    return HealthResponse(
        status="ready",
        message="Carousel renderer is running",
        version=get_settings().app_version,
    )
