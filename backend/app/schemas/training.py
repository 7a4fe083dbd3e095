"""Training Schemas — request/session/participant payloads at the API boundary.

Invariants:
    - Status fields accept only the vocabulary values (Literal), never free text
    - SessionCreate/SessionUpdate reject end_date before start_date and negative capacity
    - Text fields are stripped and must not be blank
    - Responses are built from core entities (from_attributes)

Design Decisions:
    - Literal over the core Enums: Pydantic validates natively and the error lands as a 400
"""

from datetime import datetime
from typing import Literal

from pydantic import (
    BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator,
)

RequestStatusValue = Literal["pending", "approved", "rejected", "completed"]
SessionStatusValue = Literal["scheduled", "in-progress", "completed", "cancelled"]
ParticipantStatusValue = Literal["registered", "attended", "no-show", "cancelled"]


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty or whitespace")
    return v


# ─── Training requests ───────────────────────────────────────────

class TrainingRequestCreate(BaseModel):
    """New training request — always starts pending."""
    title: str = Field(min_length=1, max_length=200)
    department: str = Field(min_length=1, max_length=50)
    training_type: str = Field(min_length=1, max_length=50)
    requester_id: int = Field(gt=0)

    @field_validator("title", "department", "training_type")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class TrainingRequestStatusUpdate(BaseModel):
    status: RequestStatusValue


class TrainingRequestSessionLink(BaseModel):
    training_session_id: int = Field(gt=0)


class TrainingRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    department: str
    training_type: str
    requester_id: int
    status: str
    training_session_id: int | None = None
    created_at: datetime
    updated_at: datetime | None = None


# ─── Training sessions ───────────────────────────────────────────

class TrainingSessionWrite(BaseModel):
    """Fields shared by create and full-replace update."""
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)
    start_date: datetime
    end_date: datetime
    location: str | None = Field(None, max_length=200)
    trainer: str = Field(min_length=1, max_length=100)
    max_participants: int = Field(ge=0)

    @field_validator("title", "trainer")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TrainingSessionCreate(TrainingSessionWrite):
    pass


class TrainingSessionUpdate(TrainingSessionWrite):
    """Full replace; the seat counter is not client-writable."""
    status: SessionStatusValue = "scheduled"


class TrainingSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    start_date: datetime
    end_date: datetime
    location: str | None = None
    trainer: str
    max_participants: int
    current_participants: int
    status: str
    created_at: datetime
    updated_at: datetime | None = None

    @computed_field
    @property
    def seats_left(self) -> int:
        return max(self.max_participants - self.current_participants, 0)


# ─── Participants ────────────────────────────────────────────────

class ParticipantStatusUpdate(BaseModel):
    status: ParticipantStatusValue


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    training_session_id: int
    status: str
    registered_at: datetime
    attended_at: datetime | None = None


class OperationResult(BaseModel):
    """Outcome of an operation that reports success as a flag."""
    success: bool
    message: str
