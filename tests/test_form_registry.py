"""
Tests for the in-memory registry of open forms.
"""

from datetime import timedelta

import pytest

from app.core.exceptions import NotFoundError
from app.forms import drafts
from app.forms.registry import FormRegistry


def test_open_replace_close():
    registry = FormRegistry()
    form = registry.open("create", drafts.new_create_draft())

    updated = registry.replace(form.form_id, drafts.add_project_field(form.draft))

    assert len(registry.get(form.form_id).draft.projects) == 2
    assert updated.opened_at == form.opened_at
    assert updated.last_used_at >= form.last_used_at

    registry.close(form.form_id)
    assert form.form_id not in registry
    with pytest.raises(NotFoundError):
        registry.get(form.form_id)


def test_sweep_discards_idle_forms_only():
    registry = FormRegistry(max_age=timedelta(minutes=30))
    idle = registry.open("create", drafts.new_create_draft())
    active = registry.open("create", drafts.new_create_draft())

    later = idle.last_used_at + timedelta(minutes=31)
    registry._forms[active.form_id] = active.model_copy(
        update={"last_used_at": later - timedelta(minutes=5)}
    )

    assert registry.sweep(now=later) == 1
    assert idle.form_id not in registry
    assert active.form_id in registry


def test_opening_a_form_sweeps_abandoned_ones():
    registry = FormRegistry(max_age=timedelta(minutes=30))
    abandoned = registry.open("create", drafts.new_create_draft())
    registry._forms[abandoned.form_id] = abandoned.model_copy(
        update={"last_used_at": abandoned.last_used_at - timedelta(hours=1)}
    )

    fresh = registry.open("create", drafts.new_create_draft())

    assert abandoned.form_id not in registry
    assert fresh.form_id in registry
    assert len(registry) == 1
