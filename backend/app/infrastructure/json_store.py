"""JSON File Entity Store — EntityStore protocol over whole-collection file read/overwrite.

Invariants:
    - One file per collection: <data_dir>/<collection>.json holding a JSON array
    - A missing file reads as an empty collection
    - Every operation reads the whole collection and, for writes, overwrites the whole file
    - Access to a collection is serialized by one asyncio.Lock per file path and event loop
    - insert() assigns one past the highest id ever issued, tracked in
      <data_dir>/<collection>.meta.json; ids of deleted records are never reissued
    - Without a sidecar (hand-made or older files) the next id is max(id) + 1
    - Files are replaced atomically (temp file + os.replace)

Design Decisions:
    - pydantic TypeAdapter for (de)serialization: dataclass entities validate on read,
      datetimes round-trip as ISO 8601 without a custom encoder
    - File IO runs in a worker thread (asyncio.to_thread) so the event loop never blocks
"""

import asyncio
import logging
import os
import weakref
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from app.core.errors import StoreError

logger = logging.getLogger(__name__)

E = TypeVar("E")

# Locks are bound to the running event loop, so they are kept per loop
_collection_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[str, asyncio.Lock]]" = (
    weakref.WeakKeyDictionary()
)


def _replace_file(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".json.tmp")
    tmp.write_bytes(payload)
    os.replace(tmp, path)


def _lock_for(path: Path) -> asyncio.Lock:
    locks = _collection_locks.setdefault(asyncio.get_running_loop(), {})
    key = str(path.resolve())
    lock = locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        locks[key] = lock
    return lock


class JsonFileEntityStore(Generic[E]):
    """Entity Store backed by a structured file."""

    def __init__(self, data_dir: str | Path, collection: str, entity_type: type[E]):
        self.path = Path(data_dir) / f"{collection}.json"
        self.meta_path = Path(data_dir) / f"{collection}.meta.json"
        self.collection = collection
        self._adapter = TypeAdapter(list[entity_type])
        self._meta_adapter = TypeAdapter(dict[str, int])

    @property
    def _lock(self) -> asyncio.Lock:
        return _lock_for(self.path)

    def _read_sync(self) -> list[E]:
        if not self.path.exists():
            return []
        raw = self.path.read_bytes()
        if not raw.strip():
            return []
        return self._adapter.validate_json(raw)

    def _write_sync(self, items: list[E]) -> None:
        _replace_file(self.path, self._adapter.dump_json(items, indent=2))

    def _read_last_id_sync(self) -> int:
        if not self.meta_path.exists():
            return 0
        return self._meta_adapter.validate_json(self.meta_path.read_bytes()).get("last_id", 0)

    def _write_last_id_sync(self, last_id: int) -> None:
        _replace_file(self.meta_path, self._meta_adapter.dump_json({"last_id": last_id}))

    async def _read(self) -> list[E]:
        try:
            return await asyncio.to_thread(self._read_sync)
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StoreError("unreadable collection file", self.collection)

    async def _write(self, items: list[E]) -> None:
        try:
            await asyncio.to_thread(self._write_sync, items)
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise StoreError("collection file not writable", self.collection)

    async def _next_id(self, items: list[E]) -> int:
        """Reserve the next id; the sidecar is written before the collection."""
        try:
            last_id = await asyncio.to_thread(self._read_last_id_sync)
            next_id = max(last_id, max((i.id for i in items), default=0)) + 1
            await asyncio.to_thread(self._write_last_id_sync, next_id)
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to reserve id in {self.meta_path}: {e}")
            raise StoreError("id sidecar not usable", self.collection)
        return next_id

    async def list_all(self) -> list[E]:
        async with self._lock:
            return await self._read()

    async def get_by_id(self, entity_id: int) -> E | None:
        async with self._lock:
            items = await self._read()
        return next((i for i in items if i.id == entity_id), None)

    async def insert(self, entity: E) -> int:
        async with self._lock:
            items = await self._read()
            entity.id = await self._next_id(items)
            items.append(entity)
            await self._write(items)
        return entity.id

    async def update(self, entity: E) -> bool:
        async with self._lock:
            items = await self._read()
            for index, item in enumerate(items):
                if item.id == entity.id:
                    items[index] = entity
                    await self._write(items)
                    return True
        return False

    async def delete(self, entity_id: int) -> bool:
        async with self._lock:
            items = await self._read()
            remaining = [i for i in items if i.id != entity_id]
            if len(remaining) == len(items):
                return False
            await self._write(remaining)
        return True
