"""Domain Types — identity types and status vocabularies for the training domain.

Invariants:
    - UserId, RoleId, RequestId, TrainingSessionId, ParticipantId, AttendanceId, TrainerId
      wrap int and type the entity ids and the core/service signatures that take them
    - Ids are assigned by the Entity Store, never by the core
    - All status vocabularies encoded as str Enums, values match the stored strings
    - Roles are data (Role rows), not an Enum: only the known names are listed here

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and compare equal to raw DB strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
RoleId = NewType("RoleId", int)
RequestId = NewType("RequestId", int)
TrainingSessionId = NewType("TrainingSessionId", int)
ParticipantId = NewType("ParticipantId", int)
AttendanceId = NewType("AttendanceId", int)
TrainerId = NewType("TrainerId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Training request states — maps to `training_requests.status`."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class SessionStatus(str, Enum):
    """Training session states — maps to `training_sessions.status`."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipantStatus(str, Enum):
    """Participant registration/attendance states."""
    REGISTERED = "registered"
    ATTENDED = "attended"
    NO_SHOW = "no-show"
    CANCELLED = "cancelled"


class AttendanceStatus(str, Enum):
    """Per-session attendance record state (reporting only)."""
    PRESENT = "present"
    ABSENT = "absent"


class DashboardView(str, Enum):
    """Dashboard shapes, resolved from a free-text role name."""
    EMPLOYEE = "employee"
    LEARNING_DEVELOPMENT = "ld"
    MANAGEMENT = "management"


# ─── Vocabularies ────────────────────────────────────────────────

# Participant rows in these states occupy a seat. Stored as raw values:
# Enum members hash by name, so set membership must use the plain strings.
ACTIVE_PARTICIPANT_STATUSES = frozenset({
    ParticipantStatus.REGISTERED.value,
    ParticipantStatus.ATTENDED.value,
})

KNOWN_ROLE_NAMES = ("employee", "ld", "admin")
