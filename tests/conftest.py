"""
Pytest configuration and fixtures.
Provides test app client and async DB session replacement.
"""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.deps.di_container import get_container
from app.api.v1.endpoints.client_forms import get_form_registry
from app.forms.registry import FormRegistry
from app.services.health_service import HealthService
from app.models.client import Client, ClientStatus
from app.models.project import Project, ProjectStatus


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """
    Create a test engine with all tables and the overview view.
    Uses in-memory SQLite for fast tests.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """Create a test database session."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
def form_registry():
    return FormRegistry()


@pytest.fixture(scope="function")
async def test_client(test_session_maker, form_registry):
    """
    Create a test HTTP client.
    Every request gets its own session on the test database.
    """

    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_form_registry] = lambda: form_registry

    container = get_container()
    container.health_service.override(providers.Object(HealthService(test_session_maker)))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    container.health_service.reset_override()
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(test_session_maker):
    """Store a client with projects directly, bypassing the form workflow."""

    async def _make_client(name="Acme", status=ClientStatus.ACTIVE, budgets=(), **fields):
        async with test_session_maker() as session:
            client = Client(name=name, status=status, **fields)
            session.add(client)
            await session.flush()
            for index, budget in enumerate(budgets):
                session.add(
                    Project(
                        client_id=client.id,
                        name=f"{name} project {index + 1}",
                        budget=budget,
                        status=ProjectStatus.NOT_COMPLETED,
                    )
                )
            await session.commit()
            return client

    return _make_client
