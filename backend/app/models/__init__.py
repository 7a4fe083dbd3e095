"""ORM Models — SQLAlchemy declarative models for all stored entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Column names match the core entity field names one to one

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import Role, User  # noqa: F401
from app.models.training_request import TrainingRequest  # noqa: F401
from app.models.training_session import TrainingSession  # noqa: F401
from app.models.training_participant import TrainingParticipant  # noqa: F401
from app.models.attendance import Attendance  # noqa: F401
from app.models.trainer import Trainer  # noqa: F401
