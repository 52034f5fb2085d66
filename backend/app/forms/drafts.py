"""
Immutable drafts for the client create/edit forms.

A draft is the unsaved, form-local state of one client and its project entries.
Drafts are frozen; every update function returns a new draft and leaves its input
untouched. Nothing in this module talks to the store.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

from app.models.client import ClientStatus


class ClientFields(BaseModel):
    """Client attributes as captured by the form. Blank optional fields are empty strings."""
    name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    status: ClientStatus = ClientStatus.ACTIVE
    notes: str = ""

    class Config:
        frozen = True

    def to_row(self) -> dict:
        """Column values for the clients table; blank optional fields become NULL."""
        return {
            "name": self.name.strip(),
            "email": self.email.strip() or None,
            "phone": self.phone.strip() or None,
            "website": self.website.strip() or None,
            "status": self.status,
            "notes": self.notes.strip() or None,
        }


class ProjectDraft(BaseModel):
    """One project entry of the form. `budget` is the raw text typed by the user."""
    id: Optional[UUID] = None
    name: str = ""
    budget: str = ""
    is_new: bool = True

    class Config:
        frozen = True

    @property
    def is_existing(self) -> bool:
        return self.id is not None and not self.is_new


class ClientDraft(BaseModel):
    """Form-local state of one client and its project entries."""
    client_id: Optional[UUID] = None
    client_fields: ClientFields = ClientFields()
    projects: Tuple[ProjectDraft, ...] = ()
    removed_project_ids: Tuple[UUID, ...] = ()

    class Config:
        frozen = True

    @property
    def is_create(self) -> bool:
        return self.client_id is None


def parse_budget(raw: Optional[str]) -> Optional[Decimal]:
    """
    Parse a budget typed into the form.

    Returns:
        The amount, or None when the text is blank, not a number, not finite or negative.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def is_valid_project(project: ProjectDraft) -> bool:
    """A project entry is saved only with a non-blank name and a usable budget."""
    return bool(project.name.strip()) and parse_budget(project.budget) is not None


def valid_projects(draft: ClientDraft) -> Tuple[ProjectDraft, ...]:
    return tuple(project for project in draft.projects if is_valid_project(project))


def format_budget(budget: Optional[Decimal]) -> str:
    """Render a stored budget as form text; a missing budget shows as "0"."""
    if budget is None:
        return "0"
    return str(budget)


def new_create_draft() -> ClientDraft:
    """Empty create form, seeded with one blank project entry."""
    return ClientDraft(projects=(ProjectDraft(),))


def draft_from_client(client, projects: Iterable) -> ClientDraft:
    """
    Edit form for a stored client.

    Args:
        client: Client row (attributes name, email, ..., status, notes)
        projects: The client's project rows; each becomes an existing entry
    """
    fields = ClientFields(
        name=client.name,
        email=client.email or "",
        phone=client.phone or "",
        website=client.website or "",
        status=client.status,
        notes=client.notes or "",
    )
    entries = tuple(
        ProjectDraft(
            id=project.id,
            name=project.name,
            budget=format_budget(project.budget),
            is_new=False,
        )
        for project in projects
    )
    return ClientDraft(client_id=client.id, client_fields=fields, projects=entries)


def update_client_fields(draft: ClientDraft, **changes) -> ClientDraft:
    """Replace some client attributes; unknown attribute names raise ValueError."""
    unknown = set(changes) - set(ClientFields.model_fields)
    if unknown:
        raise ValueError(f"Unknown client fields: {', '.join(sorted(unknown))}")
    fields = ClientFields(**{**draft.client_fields.model_dump(), **changes})
    return draft.model_copy(update={"client_fields": fields})


def add_project_field(draft: ClientDraft) -> ClientDraft:
    """Append a blank entry marked new; nothing is stored until submit."""
    return draft.model_copy(update={"projects": draft.projects + (ProjectDraft(),)})


def update_project_field(
    draft: ClientDraft,
    index: int,
    name: Optional[str] = None,
    budget: Optional[str] = None,
) -> ClientDraft:
    """Change the name and/or budget text of one entry."""
    project = project_at(draft, index)
    changes = {}
    if name is not None:
        changes["name"] = name
    if budget is not None:
        changes["budget"] = budget
    projects = list(draft.projects)
    projects[index] = project.model_copy(update=changes)
    return draft.model_copy(update={"projects": tuple(projects)})


def remove_project_field(draft: ClientDraft, index: int) -> ClientDraft:
    """
    Drop one entry from local state.
    A create form always keeps at least one entry; removing the last one is a no-op.
    """
    project_at(draft, index)
    if draft.is_create and len(draft.projects) <= 1:
        return draft
    projects = draft.projects[:index] + draft.projects[index + 1:]
    return draft.model_copy(update={"projects": projects})


def stage_project_removal(draft: ClientDraft, index: int) -> ClientDraft:
    """Drop an existing entry and remember its id for deletion on submit."""
    project = project_at(draft, index)
    removed = draft.removed_project_ids
    if project.is_existing and project.id not in removed:
        removed = removed + (project.id,)
    remaining = remove_project_field(draft, index)
    return remaining.model_copy(update={"removed_project_ids": removed})


def project_at(draft: ClientDraft, index: int) -> ProjectDraft:
    if index < 0 or index >= len(draft.projects):
        raise IndexError(f"No project entry at index {index}")
    return draft.projects[index]
