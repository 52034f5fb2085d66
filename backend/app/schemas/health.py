"""
Health check response schemas.
"""

from pydantic import BaseModel
from typing import Dict


class HealthResponse(BaseModel):
    """
    Health of the API process and its store.
    `checks` maps each check (database, client_overview) to "ok" or a failure text.
    """
    status: str
    version: str
    uptime: str
    checks: Dict[str, str] = {}

    @property
    def is_degraded(self) -> bool:
        return self.status != "ok"
