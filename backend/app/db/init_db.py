"""
Database initialization and bootstrapping.
Creates the tables and the client_overview view.

Run directly to set up a fresh database:
    python -m app.db.init_db
"""

import asyncio

from app.db.base import Base
from app.db import session as db_session
from app.core.logging import get_logger, setup_logging

# Registers every table and the view DDL with Base.metadata
import app.models  # noqa: F401

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables and the client_overview view.
    Existing tables are left as they are.
    """
    if db_session.engine is None:
        db_session.create_engine()

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized")


async def check_database() -> bool:
    """Return True when the overview view can be queried."""
    from app.db.repositories.health_repository import HealthRepository

    if db_session.async_session_maker is None:
        db_session.create_sessionmaker()

    async with db_session.async_session_maker() as session:
        repo = HealthRepository(session=session)
        return await repo.check_database() and await repo.check_overview_view()


async def main() -> None:
    setup_logging()
    await create_tables()
    ok = await check_database()
    if ok:
        logger.info("Database ready")
    else:
        logger.error("Database check failed")
    await db_session.close_db()


if __name__ == "__main__":
    asyncio.run(main())
