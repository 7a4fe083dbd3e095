"""Report & Dashboard Services — collections loaded from a store, then aggregated."""

from datetime import timedelta

import pytest

from app.core.entities import Attendance
from app.core.errors import InvalidInputError
from app.services.dashboard_service import DashboardService
from app.services.registration_manager import RegistrationManager
from app.services.report_service import ReportService, build_date_range
from factories import NOW, make_request, make_session, make_user


@pytest.fixture
async def populated(stores, seeded_roles):
    """Two Eng users (one inactive), one request, one upcoming session with one seat taken."""
    for user in (
        make_user(None, "Eng", is_active=True, name="Ann"),
        make_user(None, "Eng", is_active=False, name="Ben"),
    ):
        user.role_id = seeded_roles["employee"]
        await stores.users.insert(user)
    await stores.requests.insert(make_request(requester_id=1, department="Eng"))
    session = make_session(session_id=None, max_participants=5)
    await stores.sessions.insert(session)
    await stores.attendance.insert(
        Attendance(training_session_id=session.id, user_id=1, status="present"),
    )
    await stores.commit()
    return session.id


async def test_department_report_scenario(stores, clock, populated):
    rows = await ReportService(stores, clock).departments()
    assert [(r.department, r.user_count, r.active_users, r.request_count) for r in rows] == [
        ("Eng", 2, 1, 1),
    ]


async def test_session_and_attendance_reports(stores, clock, populated):
    await RegistrationManager(stores, clock).register(1, populated)
    service = ReportService(stores, clock)

    sessions = await service.training_sessions()
    assert sessions[0].total_participants == 1
    assert sessions[0].upcoming_sessions == 1

    attendance = await service.attendance(start_date=NOW, end_date=NOW + timedelta(days=30))
    assert attendance[0].attendance_rate == 100.0
    assert await service.attendance(end_date=NOW) == []


async def test_participation_and_trainer_reports(stores, clock, populated):
    await RegistrationManager(stores, clock).register(1, populated)
    service = ReportService(stores, clock)

    participation = await service.participation(user_id=1)
    assert [(r.user_name, r.registration_count) for r in participation] == [("Ann", 1)]

    trainers = await service.trainer_performance()
    assert [(t.trainer, t.total_sessions) for t in trainers] == [("Alice", 1)]


async def test_request_reports(stores, clock, populated):
    service = ReportService(stores, clock)
    monthly = await service.training_requests(start_date=NOW - timedelta(days=1))
    assert [(r.month, r.total_requests) for r in monthly] == [("2026-03", 1)]
    summary = await service.request_summary()
    assert [(r.department, r.status) for r in summary] == [("Eng", "pending")]


def test_inverted_report_range_rejected():
    with pytest.raises(InvalidInputError):
        build_date_range(NOW, NOW - timedelta(days=1))


async def test_dashboard_views(stores, clock, populated):
    await RegistrationManager(stores, clock).register(1, populated)
    service = DashboardService(stores, clock)

    employee = await service.build("employee", user_id=1)
    assert employee.my_training_requests == 1
    assert employee.my_upcoming_sessions == 1

    management = await service.build("Head of Finance")
    assert management.view == "management"
    assert management.total_users == 1
    assert management.active_participants == 1

    with pytest.raises(InvalidInputError):
        await service.build("employee")
