"""Entities — plain dataclasses for every record the Entity Store owns.

Invariants:
    - id is None until the store assigns one on insert
    - Statuses are stored as raw strings (values of the domain_types Enums)
    - TrainingSession.current_participants is a derived cache of the active participant count
    - All timestamps are timezone-aware UTC

Design Decisions:
    - Dataclasses, not ORM models: the core and both storage backends share one shape
    - Mutable: lifecycle operations update entities in place, then hand them back to the store
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.domain_types import (
    AttendanceId, ParticipantId, RequestId, RoleId, TrainerId, TrainingSessionId,
    UserId, RequestStatus, SessionStatus, ParticipantStatus, AttendanceStatus,
)


@dataclass
class Role:
    name: str
    id: RoleId | None = None


@dataclass
class User:
    name: str
    email: str
    department: str
    role_id: RoleId
    created_at: datetime
    is_active: bool = True
    role: str | None = None
    id: UserId | None = None


@dataclass
class TrainingRequest:
    """Employee-initiated ask for training, optionally linked to a session."""
    title: str
    department: str
    training_type: str
    requester_id: UserId
    created_at: datetime
    status: str = RequestStatus.PENDING.value
    updated_at: datetime | None = None
    training_session_id: TrainingSessionId | None = None
    id: RequestId | None = None


@dataclass
class TrainingSession:
    """Scheduled training event with a capacity and a free-text trainer name."""
    title: str
    start_date: datetime
    end_date: datetime
    trainer: str
    max_participants: int
    created_at: datetime
    location: str | None = None
    description: str | None = None
    status: str = SessionStatus.SCHEDULED.value
    current_participants: int = 0
    updated_at: datetime | None = None
    id: TrainingSessionId | None = None

    @property
    def seats_left(self) -> int:
        return max(self.max_participants - self.current_participants, 0)


@dataclass
class TrainingParticipant:
    """Join record between a user and a session."""
    user_id: UserId
    training_session_id: TrainingSessionId
    registered_at: datetime
    status: str = ParticipantStatus.REGISTERED.value
    attended_at: datetime | None = None
    id: ParticipantId | None = None


@dataclass
class Attendance:
    training_session_id: TrainingSessionId
    user_id: UserId
    status: str = AttendanceStatus.ABSENT.value
    attended_at: datetime | None = None
    id: AttendanceId | None = None


@dataclass
class Trainer:
    name: str
    email: str
    expertise: str | None = None
    is_active: bool = True
    id: TrainerId | None = None
