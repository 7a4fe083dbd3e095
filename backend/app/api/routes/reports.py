"""Report Routes — read-only aggregations for L&D and management.

Invariants:
    - start_date/end_date are optional, inclusive ISO 8601 timestamps
    - Every report returns a JSON array of rows (possibly empty)
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_report_service
from app.core.report_types import (
    AttendanceReportRow, DepartmentReportRow, ParticipationReportRow,
    RequestSummaryRow, SessionReportRow, TrainerPerformanceRow,
    TrainingRequestReportRow,
)
from app.services.report_service import ReportService

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/training-requests", response_model=list[TrainingRequestReportRow])
async def training_requests_report(
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    service: ReportService = Depends(get_report_service),
):
    return await service.training_requests(start_date, end_date)


@router.get("/departments", response_model=list[DepartmentReportRow])
async def departments_report(service: ReportService = Depends(get_report_service)):
    return await service.departments()


@router.get("/training-sessions", response_model=list[SessionReportRow])
async def training_sessions_report(
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    service: ReportService = Depends(get_report_service),
):
    return await service.training_sessions(start_date, end_date)


@router.get("/participation", response_model=list[ParticipationReportRow])
async def participation_report(
    user_id: int | None = Query(None),
    service: ReportService = Depends(get_report_service),
):
    return await service.participation(user_id)


@router.get("/attendance", response_model=list[AttendanceReportRow])
async def attendance_report(
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    service: ReportService = Depends(get_report_service),
):
    return await service.attendance(start_date, end_date)


@router.get("/trainer-performance", response_model=list[TrainerPerformanceRow])
async def trainer_performance_report(
    service: ReportService = Depends(get_report_service),
):
    return await service.trainer_performance()


@router.get("/request-summary", response_model=list[RequestSummaryRow])
async def request_summary_report(service: ReportService = Depends(get_report_service)):
    return await service.request_summary()
