"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every entity type is persisted through the same EntityStore contract
    - insert() returns the store-assigned id and writes it back onto the entity
    - update()/delete() report success with a bool; a missing id is False, never an error
    - Time and credentials are collaborators too (Clock, CredentialLookup)

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL and JSON stores share no base class
    - Async in Protocol: implementations do IO, but the pure functions that consume
      entity collections are never async — services orchestrate the awaits around them
    - Clock injected: reports, dashboards and lifecycle timestamps stay deterministic under test
"""

from datetime import datetime
from typing import Protocol, TypeVar

from app.core.entities import User

E = TypeVar("E")


class EntityStore(Protocol[E]):
    """Contract for one entity collection — implemented by shell."""
    async def list_all(self) -> list[E]: ...
    async def get_by_id(self, entity_id: int) -> E | None: ...
    async def insert(self, entity: E) -> int: ...
    async def update(self, entity: E) -> bool: ...
    async def delete(self, entity_id: int) -> bool: ...


class Clock(Protocol):
    """Source of 'now' (timezone-aware UTC)."""
    def now(self) -> datetime: ...


class CredentialLookup(Protocol):
    """Contract for credential verification — the core never owns secrets."""
    async def authenticate(
        self, email: str, password: str, role: str,
    ) -> User | None: ...
