"""Report Types — one explicit, immutable result row per report kind.

Invariants:
    - Field names are the public contract of each report (serialized as-is by the API)
    - Averages and rates are rounded to 2 decimals; counts are ints
    - DateRange bounds are inclusive; None means unbounded on that side

Design Decisions:
    - Frozen dataclasses over dicts: field names and types survive the API boundary
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.timestamps import ensure_utc


@dataclass(frozen=True)
class DateRange:
    start: datetime | None = None
    end: datetime | None = None

    def contains(self, value: datetime) -> bool:
        value = ensure_utc(value)
        if self.start is not None and value < ensure_utc(self.start):
            return False
        if self.end is not None and value > ensure_utc(self.end):
            return False
        return True

    def covers(self, start: datetime, end: datetime) -> bool:
        """Window test used by session reports: start >= from and end <= to."""
        if self.start is not None and ensure_utc(start) < ensure_utc(self.start):
            return False
        if self.end is not None and ensure_utc(end) > ensure_utc(self.end):
            return False
        return True


@dataclass(frozen=True)
class TrainingRequestReportRow:
    status: str
    department: str
    training_type: str
    month: str
    total_requests: int


@dataclass(frozen=True)
class DepartmentReportRow:
    department: str
    user_count: int
    active_users: int
    request_count: int
    training_types: int


@dataclass(frozen=True)
class SessionReportRow:
    status: str
    trainer: str
    total_sessions: int
    average_participants: float
    total_participants: int
    upcoming_sessions: int
    completed_sessions: int


@dataclass(frozen=True)
class ParticipationReportRow:
    status: str
    user_id: int
    user_name: str
    department: str
    registration_count: int
    attended_count: int
    registered_count: int


@dataclass(frozen=True)
class AttendanceReportRow:
    session_id: int
    session_title: str
    trainer: str
    total_attendance: int
    present_count: int
    absent_count: int
    attendance_rate: float


@dataclass(frozen=True)
class TrainerPerformanceRow:
    trainer: str
    total_sessions: int
    completed_sessions: int
    average_participants: float
    total_participants: int


@dataclass(frozen=True)
class RequestSummaryRow:
    department: str
    status: str
    total_requests: int


@dataclass(frozen=True)
class EmployeeDashboard:
    view: str
    user_id: int
    my_training_requests: int
    my_sessions_registered: int
    my_sessions_attended: int
    my_upcoming_sessions: int


@dataclass(frozen=True)
class ManagementDashboard:
    view: str
    total_users: int
    total_training_requests: int
    total_training_sessions: int
    pending_requests: int
    upcoming_sessions: int
    active_participants: int
    # L&D view only
    sessions_in_progress: int | None = None
    approved_requests: int | None = None
