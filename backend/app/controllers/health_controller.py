"""
Health controller.
Reports the health service's checks and logs when the store is degraded.
"""

from app.controllers.base_controller import BaseController
from app.core.logging import get_logger
from app.schemas.health import HealthResponse
from app.services.health_service import HealthService

logger = get_logger(__name__)


class HealthController(BaseController):
    """Controller for health check operations."""

    def __init__(self, health_service: HealthService):
        self.health_service = health_service

    async def get_health(self) -> HealthResponse:
        health = await self.health_service.get_health()
        if health.is_degraded:
            failed = {name: result for name, result in health.checks.items() if result != "ok"}
            logger.warning(f"Health degraded: {failed}", extra={"checks": failed})
        return health
