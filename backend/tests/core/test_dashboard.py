"""Dashboard Aggregator — role resolution and per-view counts."""

import pytest

from app.core.dashboard import employee_dashboard, management_dashboard, resolve_view
from app.core.domain_types import DashboardView
from app.core.errors import InvalidInputError
from factories import NOW, make_participant, make_request, make_session, make_user


@pytest.mark.parametrize(
    ("role", "view"),
    [
        ("employee", DashboardView.EMPLOYEE),
        ("Senior Employee", DashboardView.EMPLOYEE),
        ("ld", DashboardView.LEARNING_DEVELOPMENT),
        ("L&D Manager", DashboardView.LEARNING_DEVELOPMENT),
        ("admin", DashboardView.MANAGEMENT),
        ("", DashboardView.MANAGEMENT),
    ],
)
def test_resolve_view(role, view):
    assert resolve_view(role) == view


def test_employee_dashboard_counts():
    sessions = [
        make_session(session_id=1, start_in_days=5),
        make_session(session_id=2, start_in_days=-5, status="completed"),
    ]
    participants = [
        make_participant(7, session_id=1, status="registered"),
        make_participant(7, session_id=2, status="attended"),
        make_participant(8, session_id=1),
    ]
    requests = [make_request(requester_id=7), make_request(requester_id=8)]

    d = employee_dashboard(7, requests, participants, sessions, NOW)

    assert d.view == "employee"
    assert d.my_training_requests == 1
    assert d.my_sessions_registered == 2
    assert d.my_sessions_attended == 1
    assert d.my_upcoming_sessions == 1


def test_employee_dashboard_requires_user_id():
    with pytest.raises(InvalidInputError):
        employee_dashboard(None, [], [], [], NOW)


def test_management_dashboard_counts():
    users = [make_user(1), make_user(2, is_active=False)]
    requests = [make_request(), make_request(status="approved")]
    sessions = [
        make_session(session_id=1, start_in_days=2),
        make_session(session_id=2, start_in_days=2, status="cancelled"),
        make_session(session_id=3, start_in_days=-1, status="in-progress"),
    ]
    participants = [
        make_participant(1, session_id=1),
        make_participant(2, session_id=1, status="attended"),
    ]

    d = management_dashboard(
        DashboardView.MANAGEMENT, users, requests, sessions, participants, NOW,
    )

    assert d.total_users == 1
    assert d.total_training_requests == 2
    assert d.total_training_sessions == 3
    assert d.pending_requests == 1
    assert d.upcoming_sessions == 1
    assert d.active_participants == 1
    assert d.sessions_in_progress is None


def test_ld_view_adds_in_progress_and_approved():
    requests = [make_request(status="approved")]
    sessions = [make_session(status="in-progress")]
    d = management_dashboard(
        DashboardView.LEARNING_DEVELOPMENT, [], requests, sessions, [], NOW,
    )
    assert d.view == "ld"
    assert d.sessions_in_progress == 1
    assert d.approved_requests == 1
