"""
Base service class.
Services contain business logic and coordinate repositories.
"""

from abc import ABC
from sqlalchemy.ext.asyncio import AsyncSession


class BaseService(ABC):
    """Base class for services bound to one request's database session."""

    def __init__(self, session: AsyncSession):
        self.session = session
