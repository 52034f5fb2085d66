"""
Client form controller: the create and edit forms.

Open forms are kept in the FormRegistry. Each change threads the form's draft
through a pure update function and stores the result. Only submit and the
removal of an existing project reach the store.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.core.exceptions import ConfirmationRequired, NotFoundError
from app.forms import drafts
from app.forms.registry import FormRegistry, OpenForm
from app.schemas.client import ClientCreateForm, ClientEditForm, ClientResponse, ClientWithProjectsResponse
from app.schemas.client_form import (
    ClientFieldsPatch,
    ClientFormClosedResponse,
    ClientFormState,
    ClientFormSubmitResponse,
    ProjectEntryPatch,
)
from app.schemas.project import ProjectResponse
from app.services.client_form_service import ClientFormService


ADD_CLIENT_FAILED = "Failed to add client. Please try again."
UPDATE_CLIENT_FAILED = "Failed to update client. Please try again."
DELETE_PROJECT_FAILED = "Failed to delete project"
LOAD_PROJECTS_FAILED = "Failed to load projects"
DELETE_PROJECT_PROMPT = "Delete this project? This will also delete all tasks."


def draft_from_create_form(form: ClientCreateForm) -> drafts.ClientDraft:
    fields = drafts.ClientFields(**form.model_dump(include=set(drafts.ClientFields.model_fields)))
    projects = tuple(
        drafts.ProjectDraft(name=entry.name, budget=entry.budget, is_new=True)
        for entry in form.projects
    )
    return drafts.ClientDraft(client_fields=fields, projects=projects)


def draft_from_edit_form(client_id: UUID, form: ClientEditForm) -> drafts.ClientDraft:
    fields = drafts.ClientFields(**form.model_dump(include=set(drafts.ClientFields.model_fields)))
    projects = tuple(
        drafts.ProjectDraft(id=entry.id, name=entry.name, budget=entry.budget, is_new=entry.is_new)
        for entry in form.projects
    )
    return drafts.ClientDraft(
        client_id=client_id,
        client_fields=fields,
        projects=projects,
        removed_project_ids=tuple(form.removed_project_ids),
    )


class ClientFormController(BaseController):
    """Controller for client form sessions and one-shot form submits."""

    def __init__(self, session: AsyncSession, registry: FormRegistry):
        self.form_service = ClientFormService(session)
        self.registry = registry

    def _state(self, form: OpenForm) -> ClientFormState:
        return ClientFormState.from_draft(form.form_id, form.mode, form.draft)

    def _apply(self, form_id: UUID, update, *args, **kwargs) -> ClientFormState:
        form = self.registry.get(form_id)
        try:
            draft = update(form.draft, *args, **kwargs)
        except IndexError as exc:
            raise NotFoundError(str(exc)) from exc
        return self._state(self.registry.replace(form_id, draft))

    # Opening and closing

    def open_create_form(self) -> ClientFormState:
        """Open an empty create form with one blank project entry."""
        return self._state(self.registry.open("create", drafts.new_create_draft()))

    async def open_edit_form(self, client_id: UUID) -> ClientFormState:
        """Open an edit form loaded with the client's attributes and projects."""
        async with self.alert_on_store_error(LOAD_PROJECTS_FAILED):
            draft = await self.form_service.load_edit_draft(client_id)
        return self._state(self.registry.open("edit", draft))

    def get_form(self, form_id: UUID) -> ClientFormState:
        return self._state(self.registry.get(form_id))

    def cancel(self, form_id: UUID) -> ClientFormClosedResponse:
        """
        Close a form without saving. Projects already deleted from an edit form
        stay deleted.
        """
        self.registry.close(form_id)
        return ClientFormClosedResponse(form_id=form_id)

    # Local edits

    def update_fields(self, form_id: UUID, patch: ClientFieldsPatch) -> ClientFormState:
        return self._apply(form_id, drafts.update_client_fields, **patch.model_dump(exclude_none=True))

    def add_project(self, form_id: UUID) -> ClientFormState:
        return self._apply(form_id, drafts.add_project_field)

    def update_project(self, form_id: UUID, index: int, patch: ProjectEntryPatch) -> ClientFormState:
        return self._apply(form_id, drafts.update_project_field, index, name=patch.name, budget=patch.budget)

    async def remove_project(self, form_id: UUID, index: int, confirm: bool = False) -> ClientFormState:
        """
        Remove one project entry. Removing an existing project needs confirmation
        and, unless deletes are staged, deletes it from the store immediately.
        """
        form = self.registry.get(form_id)
        try:
            project = drafts.project_at(form.draft, index)
        except IndexError as exc:
            raise NotFoundError(str(exc)) from exc

        if project.is_existing and not confirm:
            raise ConfirmationRequired(DELETE_PROJECT_PROMPT)

        async with self.alert_on_store_error(DELETE_PROJECT_FAILED):
            draft = await self.form_service.remove_project(form.draft, index)
        return self._state(self.registry.replace(form_id, draft))

    # Submit

    async def submit(self, form_id: UUID) -> ClientFormSubmitResponse:
        """
        Commit the form's draft. On success the form is closed; on failure it
        stays open with its draft unchanged.
        """
        form = self.registry.get(form_id)
        if form.mode == "create":
            async with self.alert_on_store_error(ADD_CLIENT_FAILED):
                client, projects = await self.form_service.create_client(form.draft)
        else:
            async with self.alert_on_store_error(UPDATE_CLIENT_FAILED):
                client, projects = await self.form_service.submit_edit(form.draft)

        response = ClientFormSubmitResponse(
            form_id=form_id,
            client=ClientResponse.model_validate(client),
            projects=[ProjectResponse.model_validate(project) for project in projects],
        )
        self.registry.close(form_id)
        return response

    # One-shot forms

    async def create_client(self, form: ClientCreateForm) -> ClientWithProjectsResponse:
        """Run the create workflow for a fully filled-in form."""
        async with self.alert_on_store_error(ADD_CLIENT_FAILED):
            client, projects = await self.form_service.create_client(draft_from_create_form(form))
        return ClientWithProjectsResponse(
            client=ClientResponse.model_validate(client),
            projects=[ProjectResponse.model_validate(project) for project in projects],
        )

    async def update_client(self, client_id: UUID, form: ClientEditForm) -> ClientWithProjectsResponse:
        """Run the edit submit for a fully filled-in form."""
        async with self.alert_on_store_error(UPDATE_CLIENT_FAILED):
            client, projects = await self.form_service.submit_edit(draft_from_edit_form(client_id, form))
        return ClientWithProjectsResponse(
            client=ClientResponse.model_validate(client),
            projects=[ProjectResponse.model_validate(project) for project in projects],
        )
