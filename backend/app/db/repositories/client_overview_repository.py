"""
Read-only repository over the client_overview view.
"""

from typing import List
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import store_call
from app.models.client_overview import client_overview, CLIENT_OVERVIEW_VIEW


class ClientOverviewRepository:
    """Repository for the derived client overview rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_newest_first(self) -> List[RowMapping]:
        """
        Fetch every overview row ordered by created_at descending.
        Full scan: no pagination and no filtering.
        """
        query = select(client_overview).order_by(client_overview.c.created_at.desc())
        async with store_call(self.session, CLIENT_OVERVIEW_VIEW, "select", commit=False):
            result = await self.session.execute(query)
            rows = list(result.mappings().all())
        return rows
