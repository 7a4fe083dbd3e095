"""Dashboard Aggregator — role-shaped summaries over the same entity collections as reports.

Invariants:
    - Role matching is a case-insensitive substring test:
      "employee" -> employee view, "ld" or "l&d" -> L&D view, anything else -> management view
    - Unknown roles never raise; they fall through to the management view
    - The employee view requires a user id
    - "Upcoming" means start_date > now (and, for sessions counted as upcoming, status scheduled)
"""

from datetime import datetime

from app.core.domain_types import (
    ACTIVE_PARTICIPANT_STATUSES, DashboardView, ParticipantStatus,
    RequestStatus, SessionStatus, UserId,
)
from app.core.entities import (
    TrainingParticipant, TrainingRequest, TrainingSession, User,
)
from app.core.errors import InvalidInputError
from app.core.report_types import EmployeeDashboard, ManagementDashboard
from app.core.timestamps import ensure_utc


def resolve_view(role: str) -> DashboardView:
    normalized = (role or "").strip().lower()
    if "employee" in normalized:
        return DashboardView.EMPLOYEE
    if "l&d" in normalized or "ld" in normalized:
        return DashboardView.LEARNING_DEVELOPMENT
    return DashboardView.MANAGEMENT


def _is_upcoming_scheduled(session: TrainingSession, now: datetime) -> bool:
    return (
        session.status == SessionStatus.SCHEDULED.value
        and ensure_utc(session.start_date) > now
    )


def employee_dashboard(
    user_id: UserId | None,
    requests: list[TrainingRequest],
    participants: list[TrainingParticipant],
    sessions: list[TrainingSession],
    now: datetime,
) -> EmployeeDashboard:
    if user_id is None:
        raise InvalidInputError(
            "The employee dashboard requires a user_id", "user_id",
        )
    now = ensure_utc(now)
    sessions_by_id = {s.id: s for s in sessions}
    mine = [p for p in participants if p.user_id == user_id]

    upcoming = 0
    for p in mine:
        if p.status != ParticipantStatus.REGISTERED.value:
            continue
        session = sessions_by_id.get(p.training_session_id)
        if session is not None and _is_upcoming_scheduled(session, now):
            upcoming += 1

    return EmployeeDashboard(
        view=DashboardView.EMPLOYEE.value,
        user_id=user_id,
        my_training_requests=sum(
            1 for r in requests if r.requester_id == user_id
        ),
        my_sessions_registered=len({
            p.training_session_id for p in mine
            if p.status in ACTIVE_PARTICIPANT_STATUSES
        }),
        my_sessions_attended=sum(
            1 for p in mine if p.status == ParticipantStatus.ATTENDED.value
        ),
        my_upcoming_sessions=upcoming,
    )


def management_dashboard(
    view: DashboardView,
    users: list[User],
    requests: list[TrainingRequest],
    sessions: list[TrainingSession],
    participants: list[TrainingParticipant],
    now: datetime,
) -> ManagementDashboard:
    """Global counts; the L&D view adds in-progress sessions and approved requests."""
    now = ensure_utc(now)
    extras = {}
    if view == DashboardView.LEARNING_DEVELOPMENT:
        extras = {
            "sessions_in_progress": sum(
                1 for s in sessions if s.status == SessionStatus.IN_PROGRESS.value
            ),
            "approved_requests": sum(
                1 for r in requests if r.status == RequestStatus.APPROVED.value
            ),
        }
    return ManagementDashboard(
        view=view.value,
        total_users=sum(1 for u in users if u.is_active),
        total_training_requests=len(requests),
        total_training_sessions=len(sessions),
        pending_requests=sum(
            1 for r in requests if r.status == RequestStatus.PENDING.value
        ),
        upcoming_sessions=sum(
            1 for s in sessions if _is_upcoming_scheduled(s, now)
        ),
        active_participants=sum(
            1 for p in participants
            if p.status == ParticipantStatus.REGISTERED.value
        ),
        **extras,
    )
