"""
Client controller: the clients listing and its row actions.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.core.exceptions import ConfirmationRequired, NotFoundError, ValidationError
from app.services.client_service import ClientService
from app.services.overview_service import OverviewService
from app.schemas.client import ClientDeletedResponse, ClientResponse
from app.schemas.overview import (
    EMPTY_LISTING_MESSAGE,
    ClientListingResponse,
    ListingColumn,
    SortParams,
)
from app.schemas.project import ProjectListResponse
from app.utils.table_sorting import SORTABLE_COLUMNS, SortState, sort_rows, toggle_sort


COLUMN_HEADERS = [
    ("name", "Client Name"),
    ("email", "Email"),
    ("status", "Status"),
    ("project_count", "Projects"),
    ("total_budget", "Total Budget"),
    ("created_at", "Date Added"),
    ("actions", "Actions"),
]


DELETE_CLIENT_FAILED = "Failed to delete client. Please try again."


def delete_client_prompt(name: str) -> str:
    return (
        f'Are you sure you want to delete "{name}"? '
        "This will also delete all associated projects and tasks."
    )


def _sort_params(state: Optional[SortState]) -> SortParams:
    if state is None:
        return SortParams(sort=None, desc=False)
    return SortParams(sort=state.column, desc=state.descending)


def build_columns(state: Optional[SortState]) -> List[ListingColumn]:
    """Column headers with the current direction and the state a click would produce."""
    columns = []
    for key, header in COLUMN_HEADERS:
        if key not in SORTABLE_COLUMNS:
            columns.append(ListingColumn(key=key, header=header, sortable=False))
            continue
        columns.append(
            ListingColumn(
                key=key,
                header=header,
                sorted=state.direction if state and state.column == key else None,
                on_click=_sort_params(toggle_sort(state, key)),
            )
        )
    return columns


class ClientController(BaseController):
    """Controller for the clients listing and row actions."""

    def __init__(self, session: AsyncSession):
        self.client_service = ClientService(session)
        self.overview_service = OverviewService(session)

    async def get_listing(self, sort: Optional[SortState]) -> ClientListingResponse:
        """
        Fetch the overview once and render the table for the given sort state.
        A failing fetch is not turned into an alert; it fails the whole listing.
        """
        if sort is not None and sort.column not in SORTABLE_COLUMNS:
            raise ValidationError(f"Column '{sort.column}' is not sortable")

        fetched = await self.overview_service.get_clients_overview()
        rows = sort_rows(fetched, sort)
        return ClientListingResponse(
            columns=build_columns(sort),
            rows=rows,
            sort=_sort_params(sort),
            summary=self.overview_service.summarize(fetched),
            total=len(rows),
            empty_message=None if rows else EMPTY_LISTING_MESSAGE,
        )

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        """Get the full client record, as needed to open the edit form."""
        return await self.client_service.get_client(client_id)

    async def list_projects(self, client_id: UUID) -> ProjectListResponse:
        if await self.client_service.get_client(client_id) is None:
            raise NotFoundError("Client not found")
        projects = await self.client_service.list_projects(client_id)
        return ProjectListResponse(items=projects, total=len(projects))

    async def delete_client(self, client_id: UUID, confirm: bool = False) -> ClientDeletedResponse:
        """
        Delete a client after explicit confirmation naming it.
        On failure the caller keeps its current (stale) listing.
        """
        async with self.alert_on_store_error(DELETE_CLIENT_FAILED):
            client = await self.client_service.find_client(client_id)
            if client is None:
                raise NotFoundError("Client not found")
            if not confirm:
                raise ConfirmationRequired(delete_client_prompt(client.name))
            deleted = await self.client_service.delete_client(client_id)
        if not deleted:
            raise NotFoundError("Client not found")
        return ClientDeletedResponse(id=client_id)
