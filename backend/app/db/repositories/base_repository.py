"""
Base repository: the gateway between services and the relational store.

Every call is one independent round trip. Writes are committed as soon as the
statement succeeds, so a sequence of calls is never atomic; a failed call is
rolled back and surfaces as StoreError.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Generic, TypeVar, Type, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import StoreError
from app.core.logging import get_logger
from app.db.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


@asynccontextmanager
async def store_call(session: AsyncSession, table: str, operation: str, commit: bool = True):
    """
    Run one store operation, committing on success and translating failures.

    Args:
        session: Async database session
        table: Table or view name, used for error reporting
        operation: select/insert/update/delete
        commit: Commit the session after the body succeeds
    """
    try:
        yield
        if commit:
            await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(
            f"Store {operation} on {table} failed: {exc}",
            extra={"table": table, "operation": operation},
        )
        # The driver text stays in the log; it never reaches a response body
        raise StoreError(
            f"Failed to {operation} {table}",
            table=table,
            operation=operation,
        ) from exc


class BaseRepository(Generic[ModelType]):
    """Base repository with the select/insert/update/delete contract."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _where(self, query, filters: Dict[str, Any]):
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise ValueError(f"Unknown filter '{key}' for {self.table_name}")
            query = query.where(getattr(self.model, key) == value)
        return query

    async def select(
        self,
        order_by: Optional[str] = None,
        descending: bool = False,
        **filters,
    ) -> List[ModelType]:
        """
        Select rows matching all filters.

        Args:
            order_by: Column name to order by
            descending: Order direction
            **filters: Equality filter criteria

        Returns:
            List of model instances
        """
        query = self._where(select(self.model), filters)
        if order_by:
            column = getattr(self.model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        return await self._fetch_all(query)

    async def _fetch_all(self, query, populate_existing: bool = False) -> List[ModelType]:
        if populate_existing:
            query = query.execution_options(populate_existing=True)
        async with store_call(self.session, self.table_name, "select", commit=False):
            result = await self.session.execute(query)
            rows = list(result.scalars().all())
        return rows

    async def get(self, id: Any) -> Optional[ModelType]:
        """
        Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        async with store_call(self.session, self.table_name, "select", commit=False):
            result = await self.session.execute(
                select(self.model).where(self.model.id == id)
            )
            instance = result.scalar_one_or_none()
        return instance

    async def insert(self, rows: List[Dict[str, Any]]) -> List[ModelType]:
        """
        Insert one or more rows in a single statement batch.

        Args:
            rows: Column values per row

        Returns:
            Inserted model instances, in input order
        """
        instances = [self.model(**row) for row in rows]
        async with store_call(self.session, self.table_name, "insert"):
            self.session.add_all(instances)
            await self.session.flush()
        return instances

    async def update(self, patch: Dict[str, Any], **filters) -> List[ModelType]:
        """
        Apply a patch to every row matching the filters.

        Args:
            patch: Attributes to update
            **filters: Equality filter criteria

        Returns:
            Updated model instances
        """
        query = self._where(update(self.model), filters).values(**patch)
        async with store_call(self.session, self.table_name, "update"):
            await self.session.execute(query.execution_options(synchronize_session=False))
        # Reload so instances already in the session pick up the new values and updated_at
        return await self._fetch_all(self._where(select(self.model), filters), populate_existing=True)

    async def delete(self, **filters) -> int:
        """
        Delete every row matching the filters.
        Dependent rows are removed by the store's ON DELETE CASCADE.

        Args:
            **filters: Equality filter criteria

        Returns:
            Number of deleted rows
        """
        query = self._where(delete(self.model), filters)
        async with store_call(self.session, self.table_name, "delete"):
            result = await self.session.execute(query.execution_options(synchronize_session=False))
            deleted = result.rowcount
        return deleted
