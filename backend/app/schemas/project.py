"""
Project Pydantic schemas for responses.
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from app.models.project import ProjectStatus


class ProjectResponse(BaseModel):
    """Schema for project response."""
    id: UUID
    client_id: UUID
    name: str
    description: Optional[str] = None
    budget: Optional[Decimal] = None
    status: ProjectStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    """Schema for project list response."""
    items: List[ProjectResponse]
    total: int
