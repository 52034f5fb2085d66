"""
Tests for committing create drafts through ClientFormService.
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import StoreError, ValidationError
from app.forms import drafts
from app.models.client import Client, ClientStatus
from app.models.project import Project, ProjectStatus
from app.services.client_form_service import AT_LEAST_ONE_PROJECT, CLIENT_NAME_REQUIRED, ClientFormService


def _create_draft(*entries, name="Acme"):
    draft = drafts.update_client_fields(drafts.new_create_draft(), name=name, email="hello@acme.io")
    draft = draft.model_copy(update={"projects": ()})
    for project_name, budget in entries:
        draft = drafts.add_project_field(draft)
        draft = drafts.update_project_field(draft, len(draft.projects) - 1, name=project_name, budget=budget)
    return draft


async def _count(session_maker, model):
    async with session_maker() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar()


@pytest.mark.asyncio
async def test_create_stores_client_and_valid_projects(test_db_session, test_session_maker):
    service = ClientFormService(test_db_session)
    draft = _create_draft(("Website", "1500"), ("Logo", ""), ("  ", "20"), (" Audit ", "300.5"))

    client, projects = await service.create_client(draft)

    assert client.name == "Acme"
    assert client.status == ClientStatus.ACTIVE
    assert sorted(project.name for project in projects) == ["Audit", "Website"]
    assert all(project.client_id == client.id for project in projects)
    assert all(project.status == ProjectStatus.NOT_COMPLETED for project in projects)

    async with test_session_maker() as session:
        stored = (await session.execute(select(Project).order_by(Project.name))).scalars().all()
    assert [(project.name, project.budget) for project in stored] == [
        ("Audit", Decimal("300.50")),
        ("Website", Decimal("1500.00")),
    ]


@pytest.mark.asyncio
async def test_create_without_valid_project_leaves_client_behind(test_db_session, test_session_maker):
    service = ClientFormService(test_db_session, validate_before_write=False)
    draft = _create_draft(("Website", "abc"))

    with pytest.raises(ValidationError) as exc_info:
        await service.create_client(draft)

    assert exc_info.value.message == AT_LEAST_ONE_PROJECT
    assert await _count(test_session_maker, Client) == 1
    assert await _count(test_session_maker, Project) == 0


@pytest.mark.asyncio
async def test_create_validating_first_writes_nothing(test_db_session, test_session_maker):
    service = ClientFormService(test_db_session, validate_before_write=True)

    with pytest.raises(ValidationError):
        await service.create_client(_create_draft(("", "100")))

    assert await _count(test_session_maker, Client) == 0


@pytest.mark.asyncio
async def test_failed_project_insert_keeps_client(test_db_session, test_session_maker, monkeypatch):
    service = ClientFormService(test_db_session, compensate_failed_project_insert=False)

    async def failing_insert(rows):
        raise StoreError("Failed to insert projects", table="projects", operation="insert")

    monkeypatch.setattr(service.project_repo, "insert", failing_insert)

    with pytest.raises(StoreError):
        await service.create_client(_create_draft(("Website", "100")))

    assert await _count(test_session_maker, Client) == 1


@pytest.mark.asyncio
async def test_failed_project_insert_with_compensation_removes_client(
    test_db_session, test_session_maker, monkeypatch
):
    service = ClientFormService(test_db_session, compensate_failed_project_insert=True)

    async def failing_insert(rows):
        raise StoreError("Failed to insert projects", table="projects", operation="insert")

    monkeypatch.setattr(service.project_repo, "insert", failing_insert)

    with pytest.raises(StoreError):
        await service.create_client(_create_draft(("Website", "100")))

    assert await _count(test_session_maker, Client) == 0


@pytest.mark.asyncio
async def test_create_stores_blank_optional_fields_as_null(test_db_session):
    service = ClientFormService(test_db_session)
    draft = drafts.update_client_fields(_create_draft(("Website", "100")), email="  ", phone="")

    client, _ = await service.create_client(draft)

    assert client.email is None
    assert client.phone is None


@pytest.mark.asyncio
async def test_create_without_name_writes_nothing(test_db_session, test_session_maker):
    service = ClientFormService(test_db_session, validate_before_write=False)

    with pytest.raises(ValidationError) as exc_info:
        await service.create_client(_create_draft(("Website", "100"), name="   "))

    assert exc_info.value.message == CLIENT_NAME_REQUIRED
    assert await _count(test_session_maker, Client) == 0
    assert await _count(test_session_maker, Project) == 0
