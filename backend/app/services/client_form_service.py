"""
Client form service: the store side of the create and edit forms.

Each method issues its store calls one after another and awaits each before the
next. There is no surrounding transaction, so a failure part-way leaves the
earlier calls applied.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError, StoreError, ValidationError
from app.core.logging import get_logger
from app.services.base_service import BaseService
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.project_repository import ProjectRepository
from app.forms.drafts import (
    ClientDraft,
    ProjectDraft,
    draft_from_client,
    is_valid_project,
    parse_budget,
    remove_project_field,
    stage_project_removal,
    valid_projects,
    project_at,
)
from app.models.client import Client
from app.models.project import Project, ProjectStatus

logger = get_logger(__name__)

AT_LEAST_ONE_PROJECT = "At least one project with name and budget is required"
CLIENT_NAME_REQUIRED = "Client name is required"


class ClientFormService(BaseService):
    """Service committing client drafts to the store."""

    def __init__(
        self,
        session: AsyncSession,
        validate_before_write: Optional[bool] = None,
        compensate_failed_project_insert: Optional[bool] = None,
        staged_project_deletes: Optional[bool] = None,
    ):
        super().__init__(session)
        self.client_repo = ClientRepository(session)
        self.project_repo = ProjectRepository(session)
        self.validate_before_write = (
            settings.VALIDATE_PROJECTS_BEFORE_WRITE if validate_before_write is None else validate_before_write
        )
        self.compensate_failed_project_insert = (
            settings.COMPENSATE_FAILED_PROJECT_INSERT
            if compensate_failed_project_insert is None
            else compensate_failed_project_insert
        )
        self.staged_project_deletes = (
            settings.STAGED_PROJECT_DELETES if staged_project_deletes is None else staged_project_deletes
        )

    @staticmethod
    def _new_project_row(client_id: UUID, project: ProjectDraft) -> dict:
        return {
            "client_id": client_id,
            "name": project.name.strip(),
            "budget": parse_budget(project.budget),
            "status": ProjectStatus.NOT_COMPLETED,
        }

    @staticmethod
    def _require_name(draft: ClientDraft) -> None:
        if not draft.client_fields.name.strip():
            raise ValidationError(CLIENT_NAME_REQUIRED)

    async def create_client(self, draft: ClientDraft) -> Tuple[Client, List[Project]]:
        """
        Commit a create draft.

        Order of calls:
            1. insert the client
            2. keep only project entries with a name and a usable budget;
               none left raises ValidationError, after the client is already stored
            3. insert the kept projects in one batch, status not_completed

        Raises:
            StoreError: a store call failed; earlier calls stay applied
                        unless compensation is enabled
            ValidationError: blank client name, checked before any write;
                             no valid project entry
        """
        self._require_name(draft)
        projects = valid_projects(draft)
        if self.validate_before_write and not projects:
            raise ValidationError(AT_LEAST_ONE_PROJECT)

        [client] = await self.client_repo.insert([draft.client_fields.to_row()])
        # A failed call rolls the session back and expires loaded rows; keep the id
        client_id = client.id
        logger.info(f"Created client {client_id}", extra={"client_id": str(client_id)})

        if not projects:
            logger.warning(
                f"Client {client_id} was stored without projects",
                extra={"client_id": str(client_id)},
            )
            raise ValidationError(AT_LEAST_ONE_PROJECT, details={"client_id": str(client_id)})

        try:
            created = await self.project_repo.insert(
                [self._new_project_row(client_id, project) for project in projects]
            )
        except StoreError:
            if self.compensate_failed_project_insert:
                await self._undo_client_insert(client_id)
            raise

        logger.info(
            f"Created {len(created)} projects for client {client_id}",
            extra={"client_id": str(client_id), "project_count": len(created)},
        )
        return client, created

    async def _undo_client_insert(self, client_id: UUID) -> None:
        try:
            await self.client_repo.delete_with_dependents(client_id)
            logger.info(f"Removed client {client_id} after failed project insert")
        except StoreError:
            logger.exception(
                f"Could not remove client {client_id} after failed project insert",
                extra={"client_id": str(client_id)},
            )

    async def load_edit_draft(self, client_id: UUID) -> ClientDraft:
        """
        Build the edit draft of a stored client: its attributes plus every
        project it owns, all marked existing.
        """
        client = await self.client_repo.get(client_id)
        if not client:
            raise NotFoundError("Client not found")
        projects = await self.project_repo.list_for_client(client_id)
        return draft_from_client(client, projects)

    async def remove_project(self, draft: ClientDraft, index: int) -> ClientDraft:
        """
        Remove one project entry of an edit draft.

        New entries only leave the draft. Existing entries are deleted from the
        store right away, independent of any later submit or cancel, unless
        staged deletes are enabled; then the delete waits for submit.
        """
        project = project_at(draft, index)
        if not project.is_existing:
            return remove_project_field(draft, index)
        if self.staged_project_deletes:
            return stage_project_removal(draft, index)

        await self.project_repo.delete(id=project.id, client_id=draft.client_id)
        logger.info(
            f"Deleted project {project.id}",
            extra={"project_id": str(project.id), "client_id": str(draft.client_id)},
        )
        return remove_project_field(draft, index)

    async def submit_edit(self, draft: ClientDraft) -> Tuple[Client, List[Project]]:
        """
        Commit an edit draft.

        The client row is always updated. Then each project entry with a name and
        a usable budget is updated (existing) or inserted (new); other entries are
        skipped. The first failing call stops the loop.
        """
        self._require_name(draft)
        client_id = draft.client_id
        updated = await self.client_repo.update(draft.client_fields.to_row(), id=client_id)
        if not updated:
            raise NotFoundError("Client not found")

        for project in draft.projects:
            if not is_valid_project(project):
                continue
            if project.is_existing:
                changed = await self.project_repo.update(
                    {"name": project.name.strip(), "budget": parse_budget(project.budget)},
                    id=project.id,
                    client_id=client_id,
                )
                if not changed:
                    logger.warning(
                        f"Project {project.id} no longer exists; update skipped",
                        extra={"project_id": str(project.id)},
                    )
            elif project.is_new:
                await self.project_repo.insert([self._new_project_row(client_id, project)])

        for project_id in draft.removed_project_ids:
            await self.project_repo.delete(id=project_id, client_id=client_id)

        projects = await self.project_repo.list_for_client(client_id)
        logger.info(f"Updated client {client_id}", extra={"client_id": str(client_id)})
        return updated[0], projects
