"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    clients,
    client_forms,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["clients"],
)
api_router.include_router(
    client_forms.router,
    prefix="/client-forms",
    tags=["client-forms"],
)
