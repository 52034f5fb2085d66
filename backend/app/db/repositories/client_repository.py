"""
Client repository for database operations.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base_repository import BaseRepository
from app.models.client import Client


class ClientRepository(BaseRepository[Client]):
    """Repository for client rows, the root of the ownership chain."""

    def __init__(self, session: AsyncSession):
        super().__init__(Client, session)

    async def delete_with_dependents(self, client_id: UUID) -> bool:
        """
        Delete one client. Its projects and their tasks go with it through the
        ON DELETE CASCADE foreign keys, in the same statement.

        Returns:
            False when no client had the id
        """
        return await self.delete(id=client_id) > 0
