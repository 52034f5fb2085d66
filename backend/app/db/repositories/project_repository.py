"""
Project repository for database operations.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base_repository import BaseRepository
from app.models.project import Project


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Project, session)

    async def list_for_client(self, client_id: UUID) -> List[Project]:
        """List a client's projects, oldest first."""
        return await self.select(order_by="created_at", client_id=client_id)
