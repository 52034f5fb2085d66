"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.client import Client, ClientStatus
from app.models.project import Project, ProjectStatus
from app.models.task import Task, TaskStatus, TaskPriority
from app.models.client_overview import client_overview

__all__ = [
    "Client",
    "ClientStatus",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "client_overview",
]
