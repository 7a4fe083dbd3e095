"""User & Role ORM — people who request, attend and administer training.

Invariants:
    - email is unique
    - role_id references roles.id; the role vocabulary is rows, not an Enum
    - is_active=False users stay in reports (counted in user_count, not active_users)
    - The role name is resolved through roles by the user directory, not a relationship

Design Decisions:
    - Integer autoincrement ids: the store assigns identity on insert, and
      sqlite_autoincrement keeps SQLite from reissuing the id of a deleted row
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Role(Base):
    """Role row — employee, ld, admin (extensible)."""
    __tablename__ = "roles"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)


class User(Base):
    """User entity — identity, department and role reference."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    department: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("roles.id"), nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
