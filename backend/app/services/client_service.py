"""
Client service: single-client reads and the delete row action.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.services.base_service import BaseService
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.project_repository import ProjectRepository
from app.models.client import Client
from app.schemas.client import ClientResponse
from app.schemas.project import ProjectResponse

logger = get_logger(__name__)


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.client_repo = ClientRepository(session)
        self.project_repo = ProjectRepository(session)

    async def find_client(self, client_id: UUID) -> Optional[Client]:
        return await self.client_repo.get(client_id)

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        """Get the full client record by ID."""
        client = await self.client_repo.get(client_id)
        if not client:
            return None
        return ClientResponse.model_validate(client)

    async def list_projects(self, client_id: UUID) -> List[ProjectResponse]:
        """List the projects owned by a client."""
        projects = await self.project_repo.list_for_client(client_id)
        return [ProjectResponse.model_validate(project) for project in projects]

    async def delete_client(self, client_id: UUID) -> bool:
        """
        Delete a client. Its projects and their tasks are removed by the
        store's cascading foreign keys.
        """
        deleted = await self.client_repo.delete_with_dependents(client_id)
        if deleted:
            logger.info(f"Deleted client {client_id}", extra={"client_id": str(client_id)})
        return deleted
