"""Reporting Engine — pure aggregation of entity collections into report rows.

Invariants:
    - Read-only: inputs are never mutated
    - Each report groups by a key tuple and returns one row per non-empty group,
      except the attendance report, which returns one row per session (outer join)
    - Attendance rate is 0.0 for sessions without attendance rows (no division by zero)
    - Trainer names group case-sensitively as free text
    - "upcoming" and "completed" session counts are time based, independent of status

Design Decisions:
    - Plain dict grouping over pandas: collections are small and already in memory
    - Only the explicitly requested ordering is applied; ties fall back to the
      group key so results are stable across both storage backends
"""

from collections import defaultdict
from datetime import datetime

from app.core.domain_types import (
    AttendanceStatus, ParticipantStatus, SessionStatus, UserId,
)
from app.core.entities import (
    Attendance, TrainingParticipant, TrainingRequest, TrainingSession, User,
)
from app.core.report_types import (
    AttendanceReportRow, DateRange, DepartmentReportRow, ParticipationReportRow,
    RequestSummaryRow, SessionReportRow, TrainerPerformanceRow,
    TrainingRequestReportRow,
)
from app.core.timestamps import ensure_utc, month_key

_UNBOUNDED = DateRange()


def _average(values: list[int]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def training_request_report(
    requests: list[TrainingRequest], date_range: DateRange = _UNBOUNDED,
) -> list[TrainingRequestReportRow]:
    """Count requests per (status, department, training_type, month), month ascending."""
    groups: dict[tuple[str, str, str, str], int] = defaultdict(int)
    for r in requests:
        if not date_range.contains(r.created_at):
            continue
        groups[(r.status, r.department, r.training_type, month_key(r.created_at))] += 1

    rows = [
        TrainingRequestReportRow(
            status=status, department=department,
            training_type=training_type, month=month, total_requests=count,
        )
        for (status, department, training_type, month), count in groups.items()
    ]
    return sorted(
        rows, key=lambda row: (row.month, row.status, row.department, row.training_type),
    )


def department_report(
    users: list[User], requests: list[TrainingRequest],
) -> list[DepartmentReportRow]:
    """Users per department joined to the requests filed under that department."""
    users_by_dept: dict[str, list[User]] = defaultdict(list)
    for u in users:
        users_by_dept[u.department].append(u)

    requests_by_dept: dict[str, list[TrainingRequest]] = defaultdict(list)
    for r in requests:
        requests_by_dept[r.department].append(r)

    rows = []
    for department in sorted(users_by_dept):
        members = users_by_dept[department]
        dept_requests = requests_by_dept.get(department, [])
        rows.append(DepartmentReportRow(
            department=department,
            user_count=len(members),
            active_users=sum(1 for u in members if u.is_active),
            request_count=len(dept_requests),
            training_types=len({r.training_type for r in dept_requests}),
        ))
    return rows


def session_report(
    sessions: list[TrainingSession],
    now: datetime,
    date_range: DateRange = _UNBOUNDED,
) -> list[SessionReportRow]:
    """Sessions per (status, trainer) with participant sums and time-window counts."""
    now = ensure_utc(now)
    groups: dict[tuple[str, str], list[TrainingSession]] = defaultdict(list)
    for s in sessions:
        if date_range.covers(s.start_date, s.end_date):
            groups[(s.status, s.trainer)].append(s)

    rows = []
    for (status, trainer), members in sorted(groups.items()):
        counts = [s.current_participants for s in members]
        rows.append(SessionReportRow(
            status=status,
            trainer=trainer,
            total_sessions=len(members),
            average_participants=_average(counts),
            total_participants=sum(counts),
            upcoming_sessions=sum(
                1 for s in members if ensure_utc(s.start_date) > now
            ),
            completed_sessions=sum(
                1 for s in members if ensure_utc(s.end_date) < now
            ),
        ))
    return rows


def participation_report(
    participants: list[TrainingParticipant],
    users: list[User],
    user_id: UserId | None = None,
) -> list[ParticipationReportRow]:
    """Participant rows per (status, user), annotated with user name and department.

    Rows whose user no longer exists are dropped (inner join on users).
    """
    users_by_id = {u.id: u for u in users}
    groups: dict[tuple[str, int], int] = defaultdict(int)
    for p in participants:
        if user_id is not None and p.user_id != user_id:
            continue
        if p.user_id not in users_by_id:
            continue
        groups[(p.status, p.user_id)] += 1

    rows = []
    for (status, uid), count in groups.items():
        user = users_by_id[uid]
        rows.append(ParticipationReportRow(
            status=status,
            user_id=uid,
            user_name=user.name,
            department=user.department,
            registration_count=count,
            attended_count=count if status == ParticipantStatus.ATTENDED.value else 0,
            registered_count=count if status == ParticipantStatus.REGISTERED.value else 0,
        ))
    return sorted(
        rows, key=lambda row: (-row.registration_count, row.user_id, row.status),
    )


def attendance_report(
    sessions: list[TrainingSession],
    attendance: list[Attendance],
    date_range: DateRange = _UNBOUNDED,
) -> list[AttendanceReportRow]:
    """One row per session in range, newest start first, with attendance rate in percent."""
    by_session: dict[int, list[Attendance]] = defaultdict(list)
    for a in attendance:
        by_session[a.training_session_id].append(a)

    selected = [
        s for s in sessions if date_range.covers(s.start_date, s.end_date)
    ]
    selected.sort(key=lambda s: ensure_utc(s.start_date), reverse=True)

    rows = []
    for s in selected:
        records = by_session.get(s.id, [])
        present = sum(
            1 for a in records if a.status == AttendanceStatus.PRESENT.value
        )
        absent = sum(
            1 for a in records if a.status == AttendanceStatus.ABSENT.value
        )
        total = len(records)
        rate = round(present * 100.0 / total, 2) if total else 0.0
        rows.append(AttendanceReportRow(
            session_id=s.id,
            session_title=s.title,
            trainer=s.trainer,
            total_attendance=total,
            present_count=present,
            absent_count=absent,
            attendance_rate=rate,
        ))
    return rows


def trainer_performance_report(
    sessions: list[TrainingSession],
) -> list[TrainerPerformanceRow]:
    """Sessions per free-text trainer name, busiest trainer first."""
    groups: dict[str, list[TrainingSession]] = defaultdict(list)
    for s in sessions:
        groups[s.trainer].append(s)

    rows = []
    for trainer, members in groups.items():
        counts = [s.current_participants for s in members]
        rows.append(TrainerPerformanceRow(
            trainer=trainer,
            total_sessions=len(members),
            completed_sessions=sum(
                1 for s in members if s.status == SessionStatus.COMPLETED.value
            ),
            average_participants=_average(counts),
            total_participants=sum(counts),
        ))
    return sorted(rows, key=lambda row: (-row.total_sessions, row.trainer))


def request_summary_report(
    requests: list[TrainingRequest],
) -> list[RequestSummaryRow]:
    """Request counts per (department, status)."""
    groups: dict[tuple[str, str], int] = defaultdict(int)
    for r in requests:
        groups[(r.department, r.status)] += 1
    return [
        RequestSummaryRow(department=department, status=status, total_requests=count)
        for (department, status), count in sorted(groups.items())
    ]
