"""Registration Manager — joins and leaves sessions while keeping the seat counter exact.

Invariants:
    - register/unregister/update_participant_status each apply the participant write and
      the session counter write as one step: committed together, or neither survives
    - On SQL the step is one transaction; on the file store a failed counter write
      deletes (or restores) the participant row again (compensating rollback)
    - Mutations on one session are serialized by the shared per-session lock
      (services/session_locks.py), also taken by session update and delete
    - unregister of a user without an active row is a no-op returning False

Design Decisions:
    - Impureim sandwich: load collections, decide in core/registration.py, write back
"""

import logging
from dataclasses import replace

from app.core.domain_types import TrainingSessionId, UserId
from app.core.entities import TrainingParticipant, TrainingSession
from app.core.errors import ResourceNotFoundError, TrainingHubError
from app.core.registration import (
    adjust_counter, apply_participant_status, build_participant,
    check_registration, check_seat_available, count_active_participants,
    find_active_participant, find_participant, is_active,
)
from app.core.repository_protocols import Clock
from app.services.session_locks import session_lock
from app.services.stores import TrainingStores

logger = logging.getLogger(__name__)


class RegistrationManager:
    """Participant membership and the session seat counter."""

    def __init__(self, stores: TrainingStores, clock: Clock):
        self.stores = stores
        self.clock = clock

    async def list_participants(
        self, session_id: TrainingSessionId,
    ) -> list[TrainingParticipant]:
        """Participants of one session, oldest registration first."""
        participants = await self.stores.participants.list_all()
        rows = [p for p in participants if p.training_session_id == session_id]
        return sorted(rows, key=lambda p: p.registered_at)

    async def list_registered_sessions(self, user_id: UserId) -> list[TrainingSession]:
        """Sessions the user currently holds an active seat in, by start date."""
        participants = await self.stores.participants.list_all()
        session_ids = {
            p.training_session_id for p in participants
            if p.user_id == user_id and is_active(p)
        }
        sessions = await self.stores.sessions.list_all()
        return sorted(
            (s for s in sessions if s.id in session_ids),
            key=lambda s: s.start_date,
        )

    async def register(
        self, user_id: UserId, session_id: TrainingSessionId,
    ) -> TrainingParticipant:
        async with session_lock(session_id):
            session = await self.stores.sessions.get_by_id(session_id)
            participants = await self.stores.participants.list_all()
            try:
                check_registration(session, session_id, participants, user_id)
            except TrainingHubError as e:
                logger.warning(
                    f"Registration rejected: {e.message}",
                    extra={
                        "user_id": user_id, "session_id": session_id,
                        "error_code": e.code,
                    },
                )
                raise

            participant = build_participant(user_id, session_id, self.clock.now())
            await self.stores.participants.insert(participant)
            adjust_counter(session, +1)
            session.updated_at = self.clock.now()
            await self._write_counter_or_compensate(
                session, undo=lambda: self.stores.participants.delete(participant.id),
            )
            await self.stores.commit()

        logger.info(
            "User registered for session",
            extra={"user_id": user_id, "session_id": session_id},
        )
        return participant

    async def unregister(self, user_id: UserId, session_id: TrainingSessionId) -> bool:
        async with session_lock(session_id):
            participants = await self.stores.participants.list_all()
            participant = find_active_participant(participants, user_id, session_id)
            if participant is None:
                return False

            if not await self.stores.participants.delete(participant.id):
                return False
            session = await self.stores.sessions.get_by_id(session_id)
            if session is not None:
                adjust_counter(session, -1)
                session.updated_at = self.clock.now()
                await self._write_counter_or_compensate(
                    session, undo=lambda: self.stores.participants.insert(participant),
                )
            await self.stores.commit()

        logger.info(
            "User unregistered from session",
            extra={"user_id": user_id, "session_id": session_id},
        )
        return True

    async def update_participant_status(
        self, user_id: UserId, session_id: TrainingSessionId, status: str,
    ) -> TrainingParticipant:
        """Change a participant's status; seats follow the active/inactive boundary.

        registered <-> attended keeps the counter; leaving {registered, attended}
        frees a seat; returning to it takes one (capacity checked).
        """
        async with session_lock(session_id):
            participants = await self.stores.participants.list_all()
            participant = find_participant(participants, user_id, session_id)
            if participant is None:
                raise ResourceNotFoundError(
                    "TrainingParticipant", f"user={user_id}, session={session_id}",
                )

            previous = replace(participant)
            delta = apply_participant_status(participant, status, self.clock.now())
            session = None
            if delta:
                session = await self.stores.sessions.get_by_id(session_id)
                if delta > 0:
                    # A seat can only be taken in a session that still exists
                    if session is None:
                        raise ResourceNotFoundError("TrainingSession", session_id)
                    check_seat_available(session)

            await self.stores.participants.update(participant)
            if session is not None:
                adjust_counter(session, delta)
                session.updated_at = self.clock.now()
                await self._write_counter_or_compensate(
                    session, undo=lambda: self.stores.participants.update(previous),
                )
            await self.stores.commit()

        logger.info(
            f"Participant status set to {participant.status}",
            extra={"user_id": user_id, "session_id": session_id},
        )
        return participant

    async def recount(self, session_id: TrainingSessionId) -> TrainingSession:
        """Recompute a session's counter from its participant rows.

        If more rows are active than seats exist, max_participants is raised to
        match so the stored counter stays truthful.
        """
        async with session_lock(session_id):
            session = await self.stores.sessions.get_by_id(session_id)
            if session is None:
                raise ResourceNotFoundError("TrainingSession", session_id)
            participants = await self.stores.participants.list_all()
            actual = count_active_participants(participants, session_id)
            if actual != session.current_participants:
                logger.warning(
                    f"Seat counter drift: stored {session.current_participants}, "
                    f"actual {actual}",
                    extra={"session_id": session_id},
                )
                session.current_participants = actual
                if session.max_participants < actual:
                    session.max_participants = actual
                session.updated_at = self.clock.now()
                await self.stores.sessions.update(session)
                await self.stores.commit()
        return session

    async def _write_counter_or_compensate(self, session: TrainingSession, undo) -> None:
        """Persist the counter; on failure undo the participant write and re-raise."""
        try:
            updated = await self.stores.sessions.update(session)
        except Exception:
            await self._compensate(session.id, undo)
            raise
        if not updated:
            await self._compensate(session.id, undo)
            raise ResourceNotFoundError("TrainingSession", session.id)

    async def _compensate(self, session_id: TrainingSessionId, undo) -> None:
        logger.error(
            "Seat counter write failed; rolling back participant change",
            extra={"session_id": session_id},
        )
        await self.stores.rollback()
        if self.stores.db is None:
            await undo()
