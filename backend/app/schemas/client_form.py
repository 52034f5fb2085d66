"""
Schemas for server-side client form sessions (the create and edit modals).
"""

from pydantic import BaseModel, field_validator
from typing import Any, List, Literal, Optional
from uuid import UUID

from app.models.client import ClientStatus
from app.forms.drafts import ClientDraft, is_valid_project
from app.schemas.client import ClientResponse, _budget_as_text
from app.schemas.project import ProjectResponse


FormMode = Literal["create", "edit"]


class ClientFieldsPatch(BaseModel):
    """Partial change of the client attributes of an open form."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: Optional[ClientStatus] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Client name is required")
        return value


class ProjectEntryPatch(BaseModel):
    """Partial change of one project entry of an open form."""
    name: Optional[str] = None
    budget: Optional[str] = None

    @field_validator("budget", mode="before")
    @classmethod
    def budget_as_text(cls, value: Any) -> Any:
        return None if value is None else _budget_as_text(value)


class ProjectEntryState(BaseModel):
    """One project entry as shown in the form."""
    index: int
    id: Optional[UUID] = None
    name: str
    budget: str
    is_new: bool
    label: str
    will_be_saved: bool


class ClientFieldsState(BaseModel):
    name: str
    email: str
    phone: str
    website: str
    status: ClientStatus
    notes: str


class ClientFormState(BaseModel):
    """Current state of an open form."""
    form_id: UUID
    mode: FormMode
    client_id: Optional[UUID] = None
    fields: ClientFieldsState
    projects: List[ProjectEntryState]
    removed_project_ids: List[UUID] = []

    @classmethod
    def from_draft(cls, form_id: UUID, mode: FormMode, draft: ClientDraft) -> "ClientFormState":
        entries = [
            ProjectEntryState(
                index=index,
                id=project.id,
                name=project.name,
                budget=project.budget,
                is_new=project.is_new,
                label=f"New Project {index + 1}" if mode == "edit" and project.is_new else f"Project {index + 1}",
                will_be_saved=is_valid_project(project),
            )
            for index, project in enumerate(draft.projects)
        ]
        return cls(
            form_id=form_id,
            mode=mode,
            client_id=draft.client_id,
            fields=ClientFieldsState(**draft.client_fields.model_dump()),
            projects=entries,
            removed_project_ids=list(draft.removed_project_ids),
        )


class ClientFormSubmitResponse(BaseModel):
    """Result of a successful submit; the form is closed and the listing must be refreshed."""
    form_id: UUID
    client: ClientResponse
    projects: List[ProjectResponse] = []
    closed: bool = True
    refresh: bool = True


class ClientFormClosedResponse(BaseModel):
    """Result of cancelling a form."""
    form_id: UUID
    closed: bool = True
