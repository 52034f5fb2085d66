"""
Schemas for the clients listing: overview rows, column headers and summary figures.
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel
from typing import List, Literal, Optional
from uuid import UUID

from app.models.client import ClientStatus


EMPTY_LISTING_MESSAGE = "No clients found. Add your first client to get started."


class ClientOverviewRow(BaseModel):
    """One client with its live project count and budget total."""
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: ClientStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    project_count: int = 0
    total_budget: Decimal = Decimal("0")

    class Config:
        from_attributes = True


class SortParams(BaseModel):
    """Query parameters that reproduce a sort state; `sort` is None when unsorted."""
    sort: Optional[str] = None
    desc: bool = False


class ListingColumn(BaseModel):
    """A column header and what a click on it does."""
    key: str
    header: str
    sortable: bool = True
    sorted: Optional[Literal["asc", "desc"]] = None
    on_click: Optional[SortParams] = None


class ListingSummary(BaseModel):
    """Figures shown above the table."""
    total_clients: int
    active_clients: int
    total_budget: Decimal


class ClientListingResponse(BaseModel):
    """The clients table as rendered for one page load."""
    columns: List[ListingColumn]
    rows: List[ClientOverviewRow]
    sort: SortParams
    summary: ListingSummary
    total: int
    empty_message: Optional[str] = None
