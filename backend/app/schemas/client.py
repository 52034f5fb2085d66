"""
Client Pydantic schemas for request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional, List
from uuid import UUID

from app.models.client import ClientStatus
from app.schemas.project import ProjectResponse


def _budget_as_text(value: Any) -> Any:
    """Budgets are typed as text in the form; accept plain numbers too."""
    if value is None:
        return ""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


class ClientFieldsBase(BaseModel):
    """Client attributes as submitted by the client form."""
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field("", max_length=255)
    phone: str = Field("", max_length=50)
    website: str = Field("", max_length=255)
    status: ClientStatus = ClientStatus.ACTIVE
    notes: str = ""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Client name is required")
        return value

    @field_validator("email", "phone", "website", "notes", mode="before")
    @classmethod
    def none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class ProjectEntry(BaseModel):
    """One project entry of the form. Existing entries carry their id."""
    id: Optional[UUID] = None
    name: str = ""
    budget: str = ""
    is_new: bool = True

    @field_validator("budget", mode="before")
    @classmethod
    def budget_as_text(cls, value: Any) -> Any:
        return _budget_as_text(value)

    @field_validator("name", mode="before")
    @classmethod
    def none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class ClientCreateForm(ClientFieldsBase):
    """Full create form: client attributes plus project entries."""
    projects: List[ProjectEntry] = Field(default_factory=lambda: [ProjectEntry()])


class ClientEditForm(ClientFieldsBase):
    """Full edit form: client attributes, project entries and staged project deletes."""
    projects: List[ProjectEntry] = []
    removed_project_ids: List[UUID] = []


class ClientResponse(BaseModel):
    """Schema for the full client record."""
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: ClientStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientWithProjectsResponse(BaseModel):
    """A client together with its projects, as returned by the form workflows."""
    client: ClientResponse
    projects: List[ProjectResponse] = []
    refresh: bool = True


class ClientDeletedResponse(BaseModel):
    """Result of a confirmed client delete; the listing must be fetched again."""
    id: UUID
    deleted: bool = True
    refresh: bool = True
