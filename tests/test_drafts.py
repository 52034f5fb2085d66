"""
Tests for the form drafts and their pure update functions.
"""

import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.forms import drafts
from app.models.client import ClientStatus


def _existing(name="Site", budget="100"):
    return drafts.ProjectDraft(id=uuid.uuid4(), name=name, budget=budget, is_new=False)


def _edit_draft(*projects):
    return drafts.ClientDraft(
        client_id=uuid.uuid4(),
        client_fields=drafts.ClientFields(name="Acme"),
        projects=tuple(projects),
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1500", Decimal("1500")),
        (" 12.50 ", Decimal("12.50")),
        ("0", Decimal("0")),
        ("", None),
        ("   ", None),
        (None, None),
        ("abc", None),
        ("NaN", None),
        ("Infinity", None),
        ("-5", None),
    ],
)
def test_parse_budget(raw, expected):
    assert drafts.parse_budget(raw) == expected


def test_project_validity_needs_name_and_budget():
    assert drafts.is_valid_project(drafts.ProjectDraft(name="Site", budget="10"))
    assert not drafts.is_valid_project(drafts.ProjectDraft(name="  ", budget="10"))
    assert not drafts.is_valid_project(drafts.ProjectDraft(name="Site", budget=""))
    assert not drafts.is_valid_project(drafts.ProjectDraft(name="Site", budget="ten"))


def test_new_create_draft_has_one_blank_entry():
    draft = drafts.new_create_draft()

    assert draft.is_create
    assert len(draft.projects) == 1
    assert draft.projects[0].is_new
    assert draft.projects[0].name == ""
    assert draft.client_fields.status == ClientStatus.ACTIVE


def test_updates_return_new_drafts():
    draft = drafts.new_create_draft()

    renamed = drafts.update_client_fields(draft, name="Acme", status=ClientStatus.INACTIVE)
    extended = drafts.add_project_field(renamed)

    assert draft.client_fields.name == ""
    assert renamed.client_fields.name == "Acme"
    assert renamed.client_fields.status == ClientStatus.INACTIVE
    assert len(renamed.projects) == 1
    assert len(extended.projects) == 2
    assert extended.projects[1].is_new


def test_update_client_fields_rejects_unknown_field():
    with pytest.raises(ValueError):
        drafts.update_client_fields(drafts.new_create_draft(), budget="10")


def test_update_project_field_changes_only_given_values():
    draft = drafts.update_project_field(drafts.new_create_draft(), 0, name="Site")
    draft = drafts.update_project_field(draft, 0, budget="250")
    draft = drafts.update_project_field(draft, 0, name="Website")

    assert draft.projects[0].name == "Website"
    assert draft.projects[0].budget == "250"


def test_update_project_field_out_of_range():
    with pytest.raises(IndexError):
        drafts.update_project_field(drafts.new_create_draft(), 3, name="Site")


def test_create_draft_keeps_last_entry():
    draft = drafts.new_create_draft()

    assert drafts.remove_project_field(draft, 0) is draft


def test_remove_project_field_drops_entry():
    draft = drafts.add_project_field(drafts.new_create_draft())
    draft = drafts.update_project_field(draft, 1, name="Second")

    remaining = drafts.remove_project_field(draft, 0)

    assert [project.name for project in remaining.projects] == ["Second"]


def test_edit_draft_can_remove_every_entry():
    draft = _edit_draft(_existing())

    assert drafts.remove_project_field(draft, 0).projects == ()


def test_stage_project_removal_remembers_existing_id():
    project = _existing()
    draft = _edit_draft(project, drafts.ProjectDraft(name="New"))

    staged = drafts.stage_project_removal(draft, 0)

    assert staged.removed_project_ids == (project.id,)
    assert [entry.name for entry in staged.projects] == ["New"]
    assert draft.removed_project_ids == ()


def test_draft_from_client_marks_projects_existing():
    client = SimpleNamespace(
        id=uuid.uuid4(),
        name="Acme",
        email=None,
        phone="555",
        website=None,
        status=ClientStatus.ACTIVE,
        notes=None,
    )
    projects = [
        SimpleNamespace(id=uuid.uuid4(), name="Site", budget=Decimal("1500.00")),
        SimpleNamespace(id=uuid.uuid4(), name="Logo", budget=None),
    ]

    draft = drafts.draft_from_client(client, projects)

    assert draft.client_id == client.id
    assert draft.client_fields.email == ""
    assert draft.client_fields.phone == "555"
    assert [project.budget for project in draft.projects] == ["1500.00", "0"]
    assert all(project.is_existing for project in draft.projects)


def test_client_fields_to_row_blanks_become_null():
    fields = drafts.ClientFields(name="  Acme ", email=" ", notes="VIP")

    row = fields.to_row()

    assert row["name"] == "Acme"
    assert row["email"] is None
    assert row["phone"] is None
    assert row["notes"] == "VIP"
    assert row["status"] == ClientStatus.ACTIVE
