"""Dashboard Route — one endpoint, three shapes selected by the role path segment."""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_dashboard_service
from app.core.report_types import EmployeeDashboard, ManagementDashboard
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/{role}", response_model=EmployeeDashboard | ManagementDashboard)
async def get_dashboard(
    role: str,
    user_id: int | None = Query(None),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Employee view needs ?user_id=; unknown roles get the management view."""
    return await service.build(role, user_id)
