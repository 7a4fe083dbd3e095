"""Training Participant ORM — join record between a user and a session.

Invariants:
    - status in {registered, attended, no-show, cancelled}
    - attended_at set only when status is attended
    - At most one active (registered/attended) row per (user_id, training_session_id),
      enforced by the Registration Manager

Design Decisions:
    - No DB unique constraint on (user, session): cancelled rows are kept as history
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class TrainingParticipant(Base):
    __tablename__ = "training_participants"
    __table_args__ = (
        Index("idx_participants_session_user", "training_session_id", "user_id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    training_session_id: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="registered",
    )
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    attended_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
