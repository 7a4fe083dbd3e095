"""Lifecycle Rules — pure status and field handling for requests and sessions.

Invariants:
    - New requests start pending; new sessions start scheduled with 0 participants
    - Any status may move to any other status within its vocabulary
    - updated_at is refreshed on every status change and every session replace
    - end_date >= start_date and max_participants >= 0 for every session
    - A session replace never takes current_participants from the caller,
      and max_participants may not drop below the seats already taken

Design Decisions:
    - No transition table: ordering rules live with the callers (authorization layer)
    - Unknown status strings raise InvalidInputError here as well as at the API boundary
"""

from datetime import datetime

from app.core.domain_types import (
    RequestStatus, SessionStatus, TrainingSessionId, UserId,
)
from app.core.entities import TrainingRequest, TrainingSession
from app.core.errors import InvalidInputError


# ─── Training Requests ──────────────────────────────────────────

def validate_request_status(status: str) -> str:
    try:
        return RequestStatus(status).value
    except ValueError:
        raise InvalidInputError(
            f"Unknown training request status '{status}'", "status",
        ) from None


def build_request(
    title: str,
    department: str,
    training_type: str,
    requester_id: UserId,
    now: datetime,
) -> TrainingRequest:
    return TrainingRequest(
        title=title,
        department=department,
        training_type=training_type,
        requester_id=requester_id,
        created_at=now,
        status=RequestStatus.PENDING.value,
    )


def apply_request_status(
    request: TrainingRequest, status: str, now: datetime,
) -> TrainingRequest:
    request.status = validate_request_status(status)
    request.updated_at = now
    return request


def link_request_session(
    request: TrainingRequest, session_id: TrainingSessionId, now: datetime,
) -> TrainingRequest:
    """Explicit (re)assignment of the session a request is fulfilled by."""
    request.training_session_id = session_id
    request.updated_at = now
    return request


def sort_requests_newest_first(
    requests: list[TrainingRequest],
) -> list[TrainingRequest]:
    return sorted(requests, key=lambda r: r.created_at, reverse=True)


# ─── Training Sessions ──────────────────────────────────────────

def validate_session_status(status: str) -> str:
    try:
        return SessionStatus(status).value
    except ValueError:
        raise InvalidInputError(
            f"Unknown training session status '{status}'", "status",
        ) from None


def validate_session_fields(session: TrainingSession) -> None:
    if session.end_date < session.start_date:
        raise InvalidInputError(
            "end_date must not be before start_date", "end_date",
        )
    if session.max_participants < 0:
        raise InvalidInputError(
            "max_participants must be >= 0", "max_participants",
        )
    session.status = validate_session_status(session.status)


def prepare_new_session(
    session: TrainingSession, now: datetime,
) -> TrainingSession:
    session.status = SessionStatus.SCHEDULED.value
    session.current_participants = 0
    session.created_at = now
    session.updated_at = None
    validate_session_fields(session)
    return session


def apply_session_replace(
    existing: TrainingSession, replacement: TrainingSession, now: datetime,
) -> TrainingSession:
    """Full replace of the editable fields; identity and seat count are kept."""
    replacement.id = existing.id
    replacement.created_at = existing.created_at
    replacement.current_participants = existing.current_participants
    replacement.updated_at = now
    validate_session_fields(replacement)
    if replacement.max_participants < existing.current_participants:
        raise InvalidInputError(
            f"max_participants cannot drop below the "
            f"{existing.current_participants} seats already taken",
            "max_participants",
        )
    return replacement


def sort_sessions_by_start(
    sessions: list[TrainingSession],
) -> list[TrainingSession]:
    return sorted(sessions, key=lambda s: s.start_date)
