"""Training Session ORM — a scheduled training event with a capacity.

Invariants:
    - status in {scheduled, in-progress, completed, cancelled}, initial scheduled
    - 0 <= current_participants <= max_participants (CHECK constraints)
    - end_date >= start_date (CHECK constraint)
    - trainer is free text, not a foreign key to trainers

Design Decisions:
    - current_participants denormalized: capacity checks avoid a COUNT over participants
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class TrainingSession(Base):
    __tablename__ = "training_sessions"
    __table_args__ = (
        CheckConstraint("max_participants >= 0", name="ck_sessions_max_nonneg"),
        CheckConstraint(
            "current_participants >= 0 AND current_participants <= max_participants",
            name="ck_sessions_capacity",
        ),
        CheckConstraint("end_date >= start_date", name="ck_sessions_window"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    trainer: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="scheduled",
    )
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_participants: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
