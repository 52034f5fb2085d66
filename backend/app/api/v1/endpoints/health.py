"""
Health check endpoint.
Returns system status, uptime and database checks.
"""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse
from app.deps.di_container import get_container

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def get_health(
    request: Request,
) -> HealthResponse:
    """
    Health check endpoint.
    Reports database connectivity and whether the client overview view can be read.
    """
    container = get_container()
    controller = container.health_controller()
    return await controller.get_health()
