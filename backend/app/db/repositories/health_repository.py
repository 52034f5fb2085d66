"""
Health repository.
Provides database health check functionality.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from app.models.client_overview import client_overview


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if database is accessible, False otherwise
        """
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError:
            return False

    async def check_overview_view(self) -> bool:
        """
        Check that the schema is in place by reading from the client_overview view.

        Returns:
            True if the view can be queried, False otherwise
        """
        try:
            await self.session.execute(select(client_overview.c.id).limit(1))
            return True
        except SQLAlchemyError:
            await self.session.rollback()
            return False
