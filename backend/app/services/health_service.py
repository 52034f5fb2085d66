"""
Health service.
Reports database connectivity and whether the client_overview view is readable.
"""

import time
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import settings
from app.db import session as db_session
from app.db.repositories.health_repository import HealthRepository
from app.schemas.health import HealthResponse


class HealthService:
    """Service for health check operations."""

    def __init__(self, session_maker: Optional[async_sessionmaker[AsyncSession]] = None):
        self.start_time = time.time()
        self._session_maker = session_maker

    def _get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is not None:
            return self._session_maker
        if db_session.async_session_maker is None:
            db_session.create_sessionmaker()
        return db_session.async_session_maker

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format

        checks = {}
        try:
            async with self._get_session_maker()() as session:
                repo = HealthRepository(session=session)
                checks["database"] = "ok" if await repo.check_database() else "error"
                checks["client_overview"] = "ok" if await repo.check_overview_view() else "missing"
        except Exception as e:
            checks["database"] = f"error: {str(e)}"

        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            version=settings.VERSION,
            uptime=uptime_str,
            checks=checks,
        )
