"""SQL Entity Store — EntityStore protocol over an AsyncSession and one ORM model.

Invariants:
    - Writes are flushed, never committed: the request-scoped unit of work commits once,
      so every effect of a mutation lands in the same transaction
    - Entities and ORM rows share field names; only mapped columns are copied
    - Datetimes read back are normalized to UTC (SQLite drops tzinfo)
    - update()/delete() on a missing id return False

Design Decisions:
    - One generic class instead of a repository per entity: the contract is identical
    - session.get() for id lookups: served from the identity map inside a transaction
"""

import logging
from dataclasses import fields
from datetime import datetime
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timestamps import ensure_utc
from app.db.base import Base

logger = logging.getLogger(__name__)

E = TypeVar("E")


class SqlEntityStore(Generic[E]):
    """Entity Store backed by a relational table."""

    def __init__(
        self, db: AsyncSession, model: type[Base], entity_type: type[E],
    ):
        self.db = db
        self.model = model
        self.entity_type = entity_type
        self._columns = set(model.__table__.columns.keys())
        self._fields = [
            f.name for f in fields(entity_type) if f.name in self._columns
        ]

    def _to_entity(self, row: Base) -> E:
        values = {}
        for name in self._fields:
            value = getattr(row, name)
            if isinstance(value, datetime):
                value = ensure_utc(value)
            values[name] = value
        return self.entity_type(**values)

    def _to_columns(self, entity: E) -> dict:
        return {name: getattr(entity, name) for name in self._fields}

    async def list_all(self) -> list[E]:
        result = await self.db.execute(
            select(self.model).order_by(self.model.id),
        )
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, entity_id: int) -> E | None:
        row = await self.db.get(self.model, entity_id)
        return self._to_entity(row) if row is not None else None

    async def insert(self, entity: E) -> int:
        values = self._to_columns(entity)
        if values.get("id") is None:
            values.pop("id", None)
        row = self.model(**values)
        self.db.add(row)
        await self.db.flush()
        entity.id = row.id
        return row.id

    async def update(self, entity: E) -> bool:
        if entity.id is None:
            return False
        row = await self.db.get(self.model, entity.id)
        if row is None:
            return False
        for name, value in self._to_columns(entity).items():
            if name != "id":
                setattr(row, name, value)
        await self.db.flush()
        return True

    async def delete(self, entity_id: int) -> bool:
        row = await self.db.get(self.model, entity_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True
