"""
Client form API endpoints.
Server-side state of the create and edit modals, from open to submit or cancel.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.client_form_controller import ClientFormController
from app.deps.di_container import get_container
from app.forms.registry import FormRegistry
from app.schemas.client_form import (
    ClientFieldsPatch,
    ClientFormClosedResponse,
    ClientFormState,
    ClientFormSubmitResponse,
    ProjectEntryPatch,
)

router = APIRouter()


def get_form_registry() -> FormRegistry:
    """The process-wide registry of open forms."""
    return get_container().form_registry()


def get_controller(
    db: AsyncSession = Depends(get_db),
    registry: FormRegistry = Depends(get_form_registry),
) -> ClientFormController:
    return ClientFormController(db, registry)


@router.post("/create", response_model=ClientFormState, status_code=status.HTTP_201_CREATED)
async def open_create_form(
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    """Open the add-client form."""
    return controller.open_create_form()


@router.post("/edit/{client_id}", response_model=ClientFormState, status_code=status.HTTP_201_CREATED)
async def open_edit_form(
    client_id: UUID,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    """Open the edit form of a client, loaded with its projects."""
    return await controller.open_edit_form(client_id)


@router.get("/{form_id}", response_model=ClientFormState)
async def get_form(
    form_id: UUID,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    return controller.get_form(form_id)


@router.patch("/{form_id}/client", response_model=ClientFormState)
async def update_client_fields(
    form_id: UUID,
    patch: ClientFieldsPatch,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    """Change client attributes of the form."""
    return controller.update_fields(form_id, patch)


@router.post("/{form_id}/projects", response_model=ClientFormState)
async def add_project(
    form_id: UUID,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    """Append a blank project entry."""
    return controller.add_project(form_id)


@router.patch("/{form_id}/projects/{index}", response_model=ClientFormState)
async def update_project(
    form_id: UUID,
    index: int,
    patch: ProjectEntryPatch,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    """Change the name or budget of one project entry."""
    return controller.update_project(form_id, index, patch)


@router.delete("/{form_id}/projects/{index}", response_model=ClientFormState)
async def remove_project(
    form_id: UUID,
    index: int,
    confirm: bool = Query(False, description="Required to delete a project that is already stored"),
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormState:
    """Remove one project entry; a stored project is deleted right away."""
    return await controller.remove_project(form_id, index, confirm=confirm)


@router.post("/{form_id}/submit", response_model=ClientFormSubmitResponse)
async def submit_form(
    form_id: UUID,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormSubmitResponse:
    """Save the form. The form is closed only when saving succeeds."""
    return await controller.submit(form_id)


@router.delete("/{form_id}", response_model=ClientFormClosedResponse)
async def cancel_form(
    form_id: UUID,
    controller: ClientFormController = Depends(get_controller),
) -> ClientFormClosedResponse:
    """Close the form without saving."""
    return controller.cancel(form_id)
