"""Trainer Directory — reference list of the people who run training sessions.

Invariants:
    - Sessions keep the trainer as free text; nothing here rewrites a session
    - Emails are unique across trainers (InvalidInputError on reuse)
"""

import logging

from app.core.domain_types import TrainerId
from app.core.entities import Trainer
from app.core.errors import InvalidInputError, ResourceNotFoundError
from app.services.stores import TrainingStores

logger = logging.getLogger(__name__)


class TrainerDirectory:
    def __init__(self, stores: TrainingStores):
        self.stores = stores

    async def list_all(self) -> list[Trainer]:
        return sorted(await self.stores.trainers.list_all(), key=lambda t: t.name)

    async def get(self, trainer_id: TrainerId) -> Trainer:
        trainer = await self.stores.trainers.get_by_id(trainer_id)
        if trainer is None:
            raise ResourceNotFoundError("Trainer", trainer_id)
        return trainer

    async def create(
        self, name: str, email: str, expertise: str | None = None,
    ) -> Trainer:
        trainers = await self.stores.trainers.list_all()
        if any(t.email == email for t in trainers):
            raise InvalidInputError("Email is already in use", "email")
        trainer = Trainer(name=name, email=email, expertise=expertise)
        await self.stores.trainers.insert(trainer)
        await self.stores.commit()
        logger.info("Trainer created", extra={"trainer_id": trainer.id})
        return trainer
