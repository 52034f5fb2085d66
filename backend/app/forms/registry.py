"""
In-memory registry of open client forms.

Each open create or edit form holds one immutable draft; every change replaces the
draft as a whole. Forms live only in this process and are not shared between
workers, which suits a single-viewer tool. Forms left idle longer than the
configured age are discarded whenever another form is opened.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Literal, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.forms.drafts import ClientDraft

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OpenForm(BaseModel):
    """One open form and its current draft."""
    form_id: UUID = Field(default_factory=uuid4)
    mode: Literal["create", "edit"]
    draft: ClientDraft
    opened_at: datetime = Field(default_factory=_now)
    last_used_at: datetime = Field(default_factory=_now)

    class Config:
        frozen = True


class FormRegistry:
    """Open forms keyed by form id."""

    def __init__(self, max_age: Optional[timedelta] = None):
        self._forms: Dict[UUID, OpenForm] = {}
        self.max_age = max_age or timedelta(minutes=settings.OPEN_FORM_MAX_AGE_MINUTES)

    def __len__(self) -> int:
        return len(self._forms)

    def __contains__(self, form_id: UUID) -> bool:
        return form_id in self._forms

    def open(self, mode: str, draft: ClientDraft) -> OpenForm:
        self.sweep()
        form = OpenForm(mode=mode, draft=draft)
        self._forms[form.form_id] = form
        return form

    def get(self, form_id: UUID) -> OpenForm:
        form = self._forms.get(form_id)
        if form is None:
            raise NotFoundError("Form not found")
        return form

    def replace(self, form_id: UUID, draft: ClientDraft) -> OpenForm:
        """Swap in a new draft for an open form."""
        form = self.get(form_id).model_copy(update={"draft": draft, "last_used_at": _now()})
        self._forms[form_id] = form
        return form

    def close(self, form_id: UUID) -> None:
        """Discard a form and its draft."""
        self.get(form_id)
        del self._forms[form_id]

    def sweep(self, now: Optional[datetime] = None) -> int:
        """
        Discard forms whose draft has not changed for longer than `max_age`.

        Returns:
            Number of discarded forms
        """
        cutoff = (now or _now()) - self.max_age
        stale = [form_id for form_id, form in self._forms.items() if form.last_used_at < cutoff]
        for form_id in stale:
            del self._forms[form_id]
        if stale:
            logger.info(f"Discarded {len(stale)} abandoned forms", extra={"form_count": len(stale)})
        return len(stale)
