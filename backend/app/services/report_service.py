"""Report Service — loads entity collections and hands them to the pure report builders.

Invariants:
    - Read-only: no store write, no commit
    - Date filters are inclusive and optional on both ends
    - A range whose start is after its end is rejected with InvalidInputError
"""

import logging
from datetime import datetime

from app.core.domain_types import UserId
from app.core.errors import InvalidInputError
from app.core.report_types import (
    AttendanceReportRow, DateRange, DepartmentReportRow, ParticipationReportRow,
    RequestSummaryRow, SessionReportRow, TrainerPerformanceRow,
    TrainingRequestReportRow,
)
from app.core.reports import (
    attendance_report, department_report, participation_report,
    request_summary_report, session_report, trainer_performance_report,
    training_request_report,
)
from app.core.repository_protocols import Clock
from app.core.timestamps import ensure_utc_optional
from app.services.stores import TrainingStores

logger = logging.getLogger(__name__)


def build_date_range(
    start_date: datetime | None, end_date: datetime | None,
) -> DateRange:
    start = ensure_utc_optional(start_date)
    end = ensure_utc_optional(end_date)
    if start is not None and end is not None and start > end:
        raise InvalidInputError("start_date must not be after end_date", "start_date")
    return DateRange(start=start, end=end)


class ReportService:
    """Aggregated views for the L&D reporting screens."""

    def __init__(self, stores: TrainingStores, clock: Clock):
        self.stores = stores
        self.clock = clock

    async def training_requests(
        self, start_date: datetime | None = None, end_date: datetime | None = None,
    ) -> list[TrainingRequestReportRow]:
        date_range = build_date_range(start_date, end_date)
        requests = await self.stores.requests.list_all()
        logger.info("Building report", extra={"report": "training-requests"})
        return training_request_report(requests, date_range)

    async def departments(self) -> list[DepartmentReportRow]:
        users = await self.stores.users.list_all()
        requests = await self.stores.requests.list_all()
        logger.info("Building report", extra={"report": "departments"})
        return department_report(users, requests)

    async def training_sessions(
        self, start_date: datetime | None = None, end_date: datetime | None = None,
    ) -> list[SessionReportRow]:
        date_range = build_date_range(start_date, end_date)
        sessions = await self.stores.sessions.list_all()
        logger.info("Building report", extra={"report": "training-sessions"})
        return session_report(sessions, self.clock.now(), date_range)

    async def participation(
        self, user_id: UserId | None = None,
    ) -> list[ParticipationReportRow]:
        participants = await self.stores.participants.list_all()
        users = await self.stores.users.list_all()
        logger.info(
            "Building report", extra={"report": "participation", "user_id": user_id},
        )
        return participation_report(participants, users, user_id)

    async def attendance(
        self, start_date: datetime | None = None, end_date: datetime | None = None,
    ) -> list[AttendanceReportRow]:
        date_range = build_date_range(start_date, end_date)
        sessions = await self.stores.sessions.list_all()
        attendance = await self.stores.attendance.list_all()
        logger.info("Building report", extra={"report": "attendance"})
        return attendance_report(sessions, attendance, date_range)

    async def trainer_performance(self) -> list[TrainerPerformanceRow]:
        sessions = await self.stores.sessions.list_all()
        logger.info("Building report", extra={"report": "trainer-performance"})
        return trainer_performance_report(sessions)

    async def request_summary(self) -> list[RequestSummaryRow]:
        requests = await self.stores.requests.list_all()
        logger.info("Building report", extra={"report": "request-summary"})
        return request_summary_report(requests)
