"""Report builders — grouping, filters and ordering over plain entity lists."""

from datetime import timedelta

from app.core.entities import Attendance
from app.core.report_types import DateRange
from app.core.reports import (
    attendance_report, department_report, participation_report,
    request_summary_report, session_report, trainer_performance_report,
    training_request_report,
)
from factories import NOW, make_participant, make_request, make_session, make_user


def test_department_report_counts_users_and_requests():
    users = [make_user(1, "Eng", is_active=True), make_user(2, "Eng", is_active=False)]
    requests = [make_request(requester_id=1, department="Eng")]

    rows = department_report(users, requests)

    assert len(rows) == 1
    row = rows[0]
    assert row.department == "Eng"
    assert row.user_count == 2
    assert row.active_users == 1
    assert row.request_count == 1
    assert row.training_types == 1


def test_department_report_sorted_and_counts_distinct_types():
    users = [make_user(1, "Sales"), make_user(2, "Eng")]
    requests = [
        make_request(department="Eng", training_type="Technical"),
        make_request(department="Eng", training_type="Technical"),
        make_request(department="Eng", training_type="Soft skills"),
    ]
    rows = department_report(users, requests)
    assert [r.department for r in rows] == ["Eng", "Sales"]
    assert rows[0].request_count == 3
    assert rows[0].training_types == 2
    assert rows[1].request_count == 0


def test_training_request_report_groups_by_month():
    january = NOW.replace(month=1)
    requests = [
        make_request(created_at=NOW),
        make_request(created_at=NOW),
        make_request(created_at=january),
        make_request(created_at=january, status="approved"),
    ]
    rows = training_request_report(requests)
    assert [(r.month, r.status, r.total_requests) for r in rows] == [
        ("2026-01", "approved", 1),
        ("2026-01", "pending", 1),
        ("2026-03", "pending", 2),
    ]


def test_training_request_report_range_is_inclusive():
    requests = [
        make_request(created_at=NOW),
        make_request(created_at=NOW + timedelta(seconds=1)),
    ]
    rows = training_request_report(requests, DateRange(start=NOW, end=NOW))
    assert sum(r.total_requests for r in rows) == 1


def test_session_report_time_based_counts():
    past = make_session(session_id=1, start_in_days=-3, current=2, status="completed")
    future = make_session(session_id=2, start_in_days=3, current=1, status="completed")

    rows = session_report([past, future], NOW)

    assert len(rows) == 1
    row = rows[0]
    assert row.total_sessions == 2
    assert row.total_participants == 3
    assert row.average_participants == 1.5
    assert row.upcoming_sessions == 1
    assert row.completed_sessions == 1


def test_session_report_window_requires_whole_session_inside():
    s = make_session(start_in_days=1)
    inside = DateRange(start=NOW, end=NOW + timedelta(days=2))
    cut = DateRange(start=NOW, end=s.start_date + timedelta(hours=1))
    assert len(session_report([s], NOW, inside)) == 1
    assert session_report([s], NOW, cut) == []


def test_participation_report_drops_unknown_users_and_filters():
    users = [make_user(1, name="Ann"), make_user(2, name="Bob")]
    participants = [
        make_participant(1, session_id=1),
        make_participant(1, session_id=2),
        make_participant(2, session_id=1, status="attended"),
        make_participant(99, session_id=1),
    ]

    rows = participation_report(participants, users)
    assert [(r.user_name, r.status, r.registration_count) for r in rows] == [
        ("Ann", "registered", 2),
        ("Bob", "attended", 1),
    ]
    assert rows[0].registered_count == 2
    assert rows[1].attended_count == 1

    only_bob = participation_report(participants, users, user_id=2)
    assert [r.user_id for r in only_bob] == [2]


def test_attendance_rate_is_zero_without_records():
    s = make_session(session_id=5)
    rows = attendance_report([s], [])
    assert rows[0].total_attendance == 0
    assert rows[0].attendance_rate == 0.0


def test_attendance_rate_rounded_and_newest_first():
    older = make_session(session_id=1, start_in_days=-10)
    newer = make_session(session_id=2, start_in_days=-1)
    records = [
        Attendance(training_session_id=1, user_id=1, status="present"),
        Attendance(training_session_id=1, user_id=2, status="present"),
        Attendance(training_session_id=1, user_id=3, status="absent"),
    ]
    rows = attendance_report([older, newer], records)
    assert [r.session_id for r in rows] == [2, 1]
    assert rows[1].present_count == 2
    assert rows[1].absent_count == 1
    assert rows[1].attendance_rate == 66.67


def test_trainer_performance_is_case_sensitive_and_busiest_first():
    sessions = [
        make_session(session_id=1, trainer="alice"),
        make_session(session_id=2, trainer="Alice", status="completed", current=2),
        make_session(session_id=3, trainer="Alice", current=1),
    ]
    rows = trainer_performance_report(sessions)
    assert [(r.trainer, r.total_sessions) for r in rows] == [("Alice", 2), ("alice", 1)]
    assert rows[0].completed_sessions == 1
    assert rows[0].total_participants == 3


def test_request_summary_counts_department_status_pairs():
    requests = [
        make_request(department="Eng", status="approved"),
        make_request(department="Eng", status="approved"),
        make_request(department="HR"),
    ]
    rows = request_summary_report(requests)
    assert [(r.department, r.status, r.total_requests) for r in rows] == [
        ("Eng", "approved", 2),
        ("HR", "pending", 1),
    ]
