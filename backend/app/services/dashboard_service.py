"""Dashboard Service — resolves the caller's view and builds its summary."""

import logging

from app.core.dashboard import employee_dashboard, management_dashboard, resolve_view
from app.core.domain_types import DashboardView, UserId
from app.core.report_types import EmployeeDashboard, ManagementDashboard
from app.core.repository_protocols import Clock
from app.services.stores import TrainingStores

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, stores: TrainingStores, clock: Clock):
        self.stores = stores
        self.clock = clock

    async def build(
        self, role: str, user_id: UserId | None = None,
    ) -> EmployeeDashboard | ManagementDashboard:
        view = resolve_view(role)
        logger.info(
            f"Building {view.value} dashboard",
            extra={"role": role, "user_id": user_id},
        )
        now = self.clock.now()
        requests = await self.stores.requests.list_all()
        participants = await self.stores.participants.list_all()
        sessions = await self.stores.sessions.list_all()

        if view == DashboardView.EMPLOYEE:
            return employee_dashboard(user_id, requests, participants, sessions, now)

        users = await self.stores.users.list_all()
        return management_dashboard(view, users, requests, sessions, participants, now)
