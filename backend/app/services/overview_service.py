"""
Overview service: the read side of the clients listing.
"""

from decimal import Decimal
from typing import List, Sequence
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.base_service import BaseService
from app.db.repositories.client_overview_repository import ClientOverviewRepository
from app.models.client import ClientStatus
from app.schemas.overview import ClientOverviewRow, ListingSummary


class OverviewService(BaseService):
    """Service for client overview rows."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.overview_repo = ClientOverviewRepository(session)

    async def get_clients_overview(self) -> List[ClientOverviewRow]:
        """
        Fetch every client with its project count and budget total, newest first.
        The aggregates come from the database view on every call; nothing is cached.
        StoreError propagates to the caller.
        """
        rows = await self.overview_repo.list_newest_first()
        return [ClientOverviewRow.model_validate(dict(row)) for row in rows]

    @staticmethod
    def summarize(rows: Sequence[ClientOverviewRow]) -> ListingSummary:
        """Header figures: client count, active client count and the budget of all clients."""
        return ListingSummary(
            total_clients=len(rows),
            active_clients=sum(1 for row in rows if row.status == ClientStatus.ACTIVE),
            total_budget=sum((row.total_budget for row in rows), Decimal("0")),
        )
