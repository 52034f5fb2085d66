"""
SQLAlchemy declarative base for models.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Read-only views live in their own metadata so create_all never builds them as tables
view_metadata = MetaData()


class Base(DeclarativeBase):
    """Base class for all table models."""
    pass
