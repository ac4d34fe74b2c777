"""
Dashboard endpoints.
Business statistics and analytics.
"""

from fastapi import APIRouter

from solobill.api.deps import Store
from solobill.services.dashboard import DashboardService


router = APIRouter()


@router.get(
    "",
    summary="Full dashboard",
    description="Get every dashboard statistic",
)
async def get_full_dashboard(store: Store) -> dict:
    """Get the full dashboard."""
    service = DashboardService(store)
    return service.get_full_dashboard()


@router.get(
    "/overview",
    summary="Overview",
    description="Total paid, pending amount, overdue count and estimated MRR",
)
async def get_overview(store: Store) -> dict:
    """Get the overview."""
    service = DashboardService(store)
    return service.get_overview()


@router.get(
    "/distribution",
    summary="Invoice distribution",
    description="Invoice count by status",
)
async def get_status_distribution(store: Store) -> dict:
    """Get the invoice distribution."""
    service = DashboardService(store)
    return service.get_status_distribution()


@router.get(
    "/revenue-by-client",
    summary="Revenue by client",
    description="Billed amount per client",
)
async def get_revenue_by_client(store: Store) -> list:
    """Get revenue by client."""
    service = DashboardService(store)
    return service.get_revenue_by_client()
