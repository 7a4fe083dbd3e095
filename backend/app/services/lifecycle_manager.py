"""Lifecycle Managers — CRUD and status changes for training requests and sessions.

Invariants:
    - Status changes are unconstrained within each vocabulary (no transition table)
    - Every status change refreshes updated_at from the injected clock
    - update/update_status/link_session on a missing id raise ResourceNotFoundError
    - delete is unconditional and reports success as a bool (no cascade protection)
    - Session seat counters are owned by the Registration Manager, never written here
      except to carry the stored value through a full replace
    - Session update and delete hold the same per-session lock as registration

Design Decisions:
    - Pure rules in core/lifecycle.py; this module only loads, delegates and persists
"""

import logging
from datetime import datetime

from app.core.domain_types import RequestId, TrainingSessionId, UserId
from app.core.entities import TrainingRequest, TrainingSession
from app.core.errors import ResourceNotFoundError
from app.core.lifecycle import (
    apply_request_status, apply_session_replace, build_request,
    link_request_session, prepare_new_session, sort_requests_newest_first,
    sort_sessions_by_start, validate_request_status,
)
from app.core.repository_protocols import Clock
from app.core.timestamps import ensure_utc
from app.services.session_locks import session_lock
from app.services.stores import TrainingStores

logger = logging.getLogger(__name__)


class RequestLifecycleManager:
    """Training request lifecycle: pending -> approved/rejected/completed (any order)."""

    def __init__(self, stores: TrainingStores, clock: Clock):
        self.stores = stores
        self.clock = clock

    async def list_all(self) -> list[TrainingRequest]:
        return sort_requests_newest_first(await self.stores.requests.list_all())

    async def get(self, request_id: RequestId) -> TrainingRequest:
        request = await self.stores.requests.get_by_id(request_id)
        if request is None:
            raise ResourceNotFoundError("TrainingRequest", request_id)
        return request

    async def list_by_user(self, user_id: UserId) -> list[TrainingRequest]:
        requests = await self.stores.requests.list_all()
        return sort_requests_newest_first(
            [r for r in requests if r.requester_id == user_id],
        )

    async def list_by_status(self, status: str) -> list[TrainingRequest]:
        status = validate_request_status(status)
        requests = await self.stores.requests.list_all()
        return sort_requests_newest_first(
            [r for r in requests if r.status == status],
        )

    async def create(
        self, title: str, department: str, training_type: str, requester_id: UserId,
    ) -> TrainingRequest:
        request = build_request(
            title, department, training_type, requester_id, self.clock.now(),
        )
        await self.stores.requests.insert(request)
        await self.stores.commit()
        logger.info(
            "Training request created",
            extra={"request_id": request.id, "user_id": requester_id},
        )
        return request

    async def update_status(self, request_id: RequestId, status: str) -> TrainingRequest:
        request = await self.get(request_id)
        apply_request_status(request, status, self.clock.now())
        if not await self.stores.requests.update(request):
            raise ResourceNotFoundError("TrainingRequest", request_id)
        await self.stores.commit()
        logger.info(
            f"Training request status set to {request.status}",
            extra={"request_id": request_id},
        )
        return request

    async def link_session(
        self, request_id: RequestId, session_id: TrainingSessionId,
    ) -> TrainingRequest:
        """Explicitly (re)assign the session that fulfils a request."""
        request = await self.get(request_id)
        if await self.stores.sessions.get_by_id(session_id) is None:
            raise ResourceNotFoundError("TrainingSession", session_id)
        link_request_session(request, session_id, self.clock.now())
        await self.stores.requests.update(request)
        await self.stores.commit()
        logger.info(
            "Training request linked to session",
            extra={"request_id": request_id, "session_id": session_id},
        )
        return request

    async def delete(self, request_id: RequestId) -> bool:
        deleted = await self.stores.requests.delete(request_id)
        if deleted:
            await self.stores.commit()
            logger.info("Training request deleted", extra={"request_id": request_id})
        return deleted


class SessionLifecycleManager:
    """Training session lifecycle: scheduled -> in-progress/completed/cancelled (any order)."""

    def __init__(self, stores: TrainingStores, clock: Clock):
        self.stores = stores
        self.clock = clock

    async def list_all(self) -> list[TrainingSession]:
        return sort_sessions_by_start(await self.stores.sessions.list_all())

    async def get(self, session_id: TrainingSessionId) -> TrainingSession:
        session = await self.stores.sessions.get_by_id(session_id)
        if session is None:
            raise ResourceNotFoundError("TrainingSession", session_id)
        return session

    async def list_by_request(self, request_id: RequestId) -> list[TrainingSession]:
        request = await self.stores.requests.get_by_id(request_id)
        if request is None or request.training_session_id is None:
            return []
        session = await self.stores.sessions.get_by_id(request.training_session_id)
        return [session] if session is not None else []

    async def create(
        self, title: str, start_date: datetime, end_date: datetime, trainer: str,
        max_participants: int, location: str | None = None,
        description: str | None = None,
    ) -> TrainingSession:
        session = TrainingSession(
            title=title, start_date=ensure_utc(start_date),
            end_date=ensure_utc(end_date), trainer=trainer,
            max_participants=max_participants, location=location,
            description=description, created_at=self.clock.now(),
        )
        prepare_new_session(session, self.clock.now())
        await self.stores.sessions.insert(session)
        await self.stores.commit()
        logger.info("Training session created", extra={"session_id": session.id})
        return session

    async def update(
        self, session_id: TrainingSessionId, title: str, start_date: datetime,
        end_date: datetime, trainer: str, max_participants: int, status: str,
        location: str | None = None, description: str | None = None,
    ) -> TrainingSession:
        """Full replace of a session's editable fields.

        The stored seat counter is read and written back under the session lock,
        so a registration running at the same time is never lost.
        """
        async with session_lock(session_id):
            existing = await self.get(session_id)
            replacement = TrainingSession(
                title=title, start_date=ensure_utc(start_date),
                end_date=ensure_utc(end_date), trainer=trainer,
                max_participants=max_participants, location=location,
                description=description, status=status,
                created_at=existing.created_at,
            )
            session = apply_session_replace(existing, replacement, self.clock.now())
            if not await self.stores.sessions.update(session):
                raise ResourceNotFoundError("TrainingSession", session_id)
            await self.stores.commit()
        logger.info(
            f"Training session updated (status {session.status})",
            extra={"session_id": session_id},
        )
        return session

    async def delete(self, session_id: TrainingSessionId) -> bool:
        async with session_lock(session_id):
            deleted = await self.stores.sessions.delete(session_id)
            if deleted:
                await self.stores.commit()
                logger.info("Training session deleted", extra={"session_id": session_id})
        return deleted
