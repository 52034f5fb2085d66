"""
Base controller class.
Controllers coordinate services, turn store failures into user alerts
and return Pydantic schemas.
"""

from abc import ABC
from contextlib import asynccontextmanager

from app.core.exceptions import ActionFailed, StoreError
from app.core.logging import get_logger

logger = get_logger(__name__)


class BaseController(ABC):
    """Base controller class for all controllers."""

    @asynccontextmanager
    async def alert_on_store_error(self, alert: str):
        """
        Run one user action; a StoreError becomes ActionFailed carrying only `alert`.
        The store detail is logged here and not returned to the user.
        """
        try:
            yield
        except StoreError as exc:
            logger.error(
                f"{alert} ({exc.message})",
                extra={"table": exc.table, "operation": exc.operation, "store_details": exc.store_details},
            )
            raise ActionFailed(alert) from exc
