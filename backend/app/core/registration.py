"""Registration Rules — pure capacity and duplicate-registration checks.

Invariants:
    - 0 <= current_participants <= max_participants for every session
    - current_participants == number of rows for the session with status in {registered, attended}
    - At most one active participant row per (user, session) pair
    - Conflict is checked before capacity: a duplicate never reports "full"
    - attended_at is set only on the transition to attended, cleared otherwise

Design Decisions:
    - Pure functions over entity lists: the Registration Manager fetches, these decide
    - Status changes return a counter delta (-1, 0, +1) instead of touching the session,
      so the caller applies participant and counter writes as one step
"""

from datetime import datetime

from app.core.domain_types import (
    ACTIVE_PARTICIPANT_STATUSES, ParticipantStatus, TrainingSessionId, UserId,
)
from app.core.entities import TrainingParticipant, TrainingSession
from app.core.errors import (
    CapacityExceededError, InvalidInputError, RegistrationConflictError,
    ResourceNotFoundError,
)


def is_active(participant: TrainingParticipant) -> bool:
    return participant.status in ACTIVE_PARTICIPANT_STATUSES


def find_active_participant(
    participants: list[TrainingParticipant], user_id: UserId, session_id: TrainingSessionId,
) -> TrainingParticipant | None:
    """Return the active row for (user, session), if any."""
    for p in participants:
        if (
            p.user_id == user_id
            and p.training_session_id == session_id
            and is_active(p)
        ):
            return p
    return None


def find_participant(
    participants: list[TrainingParticipant], user_id: UserId, session_id: TrainingSessionId,
) -> TrainingParticipant | None:
    """Return the row a status update applies to.

    The active row wins; otherwise the most recently registered one.
    """
    active = find_active_participant(participants, user_id, session_id)
    if active is not None:
        return active
    rows = [
        p for p in participants
        if p.user_id == user_id and p.training_session_id == session_id
    ]
    if not rows:
        return None
    return max(rows, key=lambda p: p.registered_at)


def count_active_participants(
    participants: list[TrainingParticipant], session_id: TrainingSessionId,
) -> int:
    return sum(
        1 for p in participants
        if p.training_session_id == session_id and is_active(p)
    )


def check_registration(
    session: TrainingSession | None,
    session_id: TrainingSessionId,
    participants: list[TrainingParticipant],
    user_id: UserId,
) -> TrainingSession:
    """Raise NotFound / Conflict / CapacityExceeded, else return the session."""
    if session is None:
        raise ResourceNotFoundError("TrainingSession", session_id)
    if find_active_participant(participants, user_id, session_id) is not None:
        raise RegistrationConflictError(user_id, session_id)
    check_seat_available(session)
    return session


def check_seat_available(session: TrainingSession) -> None:
    if session.current_participants >= session.max_participants:
        raise CapacityExceededError(session.id, session.max_participants)


def build_participant(
    user_id: UserId, session_id: TrainingSessionId, now: datetime,
) -> TrainingParticipant:
    return TrainingParticipant(
        user_id=user_id,
        training_session_id=session_id,
        registered_at=now,
        status=ParticipantStatus.REGISTERED.value,
    )


def validate_participant_status(status: str) -> str:
    try:
        return ParticipantStatus(status).value
    except ValueError:
        raise InvalidInputError(
            f"Unknown participant status '{status}'", "status",
        ) from None


def apply_participant_status(
    participant: TrainingParticipant, status: str, now: datetime,
) -> int:
    """Set status (and attended_at) in place. Returns the seat counter delta."""
    new_status = validate_participant_status(status)
    was_active = is_active(participant)
    participant.status = new_status
    participant.attended_at = (
        now if new_status == ParticipantStatus.ATTENDED.value else None
    )
    now_active = is_active(participant)
    if was_active == now_active:
        return 0
    return 1 if now_active else -1


def adjust_counter(session: TrainingSession, delta: int) -> None:
    """Apply a seat delta, keeping the counter inside [0, max_participants]."""
    updated = session.current_participants + delta
    if updated < 0:
        updated = 0
    if updated > session.max_participants:
        raise CapacityExceededError(session.id, session.max_participants)
    session.current_participants = updated
