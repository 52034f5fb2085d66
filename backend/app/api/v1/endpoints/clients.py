"""
Client API endpoints: the clients listing, its row actions and one-shot form submits.
"""

from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.client_controller import ClientController
from app.controllers.client_form_controller import ClientFormController
from app.api.v1.endpoints.client_forms import get_form_registry
from app.forms.registry import FormRegistry
from app.schemas.client import (
    ClientCreateForm,
    ClientEditForm,
    ClientResponse,
    ClientWithProjectsResponse,
    ClientDeletedResponse,
)
from app.schemas.overview import ClientListingResponse
from app.schemas.project import ProjectListResponse
from app.utils.table_sorting import DEFAULT_SORT, SortState

router = APIRouter()

UNSORTED = "none"


@router.get("", response_model=ClientListingResponse)
async def list_clients(
    sort: str = Query(DEFAULT_SORT.column, description="Column to sort by, or 'none' for fetch order"),
    desc: bool = Query(DEFAULT_SORT.descending),
    db: AsyncSession = Depends(get_db),
) -> ClientListingResponse:
    """List clients with project counts and budget totals."""
    controller = ClientController(db)
    state = None if sort == UNSORTED else SortState(column=sort, descending=desc)
    return await controller.get_listing(state)


@router.post("", response_model=ClientWithProjectsResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    form: ClientCreateForm,
    db: AsyncSession = Depends(get_db),
    registry: FormRegistry = Depends(get_form_registry),
) -> ClientWithProjectsResponse:
    """Create a client and its initial projects."""
    controller = ClientFormController(db, registry)
    return await controller.create_client(form)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Get client by ID."""
    controller = ClientController(db)
    client = await controller.get_client(client_id)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
    return client


@router.get("/{client_id}/projects", response_model=ProjectListResponse)
async def list_client_projects(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ProjectListResponse:
    """List a client's projects, oldest first."""
    controller = ClientController(db)
    return await controller.list_projects(client_id)


@router.put("/{client_id}", response_model=ClientWithProjectsResponse)
async def update_client(
    client_id: UUID,
    form: ClientEditForm,
    db: AsyncSession = Depends(get_db),
    registry: FormRegistry = Depends(get_form_registry),
) -> ClientWithProjectsResponse:
    """Update a client and upsert its project entries."""
    controller = ClientFormController(db, registry)
    return await controller.update_client(client_id, form)


@router.delete("/{client_id}", response_model=ClientDeletedResponse)
async def delete_client(
    client_id: UUID,
    confirm: bool = Query(False, description="Set once the user confirmed the delete prompt"),
    db: AsyncSession = Depends(get_db),
) -> ClientDeletedResponse:
    """Delete a client together with its projects and their tasks."""
    controller = ClientController(db)
    return await controller.delete_client(client_id, confirm=confirm)
