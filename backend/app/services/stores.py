"""Store Bundle — the set of Entity Stores one request works against.

Invariants:
    - Every service receives a TrainingStores, never a concrete backend
    - commit()/rollback() are the unit-of-work boundary: real for SQL, no-ops for files
      (file stores persist each write immediately)

Design Decisions:
    - Dataclass bundle over a DI container: explicit wiring in api/dependencies.py
    - Factory per backend keeps the entity <-> table/collection mapping in one place
"""

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from app.core import entities
from app.core.repository_protocols import EntityStore
from app.infrastructure.json_store import JsonFileEntityStore
from app.infrastructure.sql_store import SqlEntityStore
from app import models


@dataclass
class TrainingStores:
    users: EntityStore[entities.User]
    roles: EntityStore[entities.Role]
    requests: EntityStore[entities.TrainingRequest]
    sessions: EntityStore[entities.TrainingSession]
    participants: EntityStore[entities.TrainingParticipant]
    attendance: EntityStore[entities.Attendance]
    trainers: EntityStore[entities.Trainer]
    db: AsyncSession | None = None

    async def commit(self) -> None:
        if self.db is not None:
            await self.db.commit()

    async def rollback(self) -> None:
        if self.db is not None:
            await self.db.rollback()


def build_sql_stores(db: AsyncSession) -> TrainingStores:
    return TrainingStores(
        users=SqlEntityStore(db, models.User, entities.User),
        roles=SqlEntityStore(db, models.Role, entities.Role),
        requests=SqlEntityStore(db, models.TrainingRequest, entities.TrainingRequest),
        sessions=SqlEntityStore(db, models.TrainingSession, entities.TrainingSession),
        participants=SqlEntityStore(
            db, models.TrainingParticipant, entities.TrainingParticipant,
        ),
        attendance=SqlEntityStore(db, models.Attendance, entities.Attendance),
        trainers=SqlEntityStore(db, models.Trainer, entities.Trainer),
        db=db,
    )


def build_json_stores(data_dir: str | Path) -> TrainingStores:
    return TrainingStores(
        users=JsonFileEntityStore(data_dir, "users", entities.User),
        roles=JsonFileEntityStore(data_dir, "roles", entities.Role),
        requests=JsonFileEntityStore(data_dir, "training_requests", entities.TrainingRequest),
        sessions=JsonFileEntityStore(data_dir, "training_sessions", entities.TrainingSession),
        participants=JsonFileEntityStore(
            data_dir, "training_participants", entities.TrainingParticipant,
        ),
        attendance=JsonFileEntityStore(data_dir, "attendance", entities.Attendance),
        trainers=JsonFileEntityStore(data_dir, "trainers", entities.Trainer),
    )
