"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from solobill.api.v1.endpoints import (
    clients,
    invoices,
    dashboard,
    assistant,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clients"],
)

api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["Invoices"],
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)

api_router.include_router(
    assistant.router,
    prefix="/assistant",
    tags=["Assistant"],
)
