"""Registration Manager — seat counter and participant rows move together.

Invariants:
    - Counter equals the number of active rows after every operation
    - A failed counter write leaves no participant change behind (both backends)
    - Concurrent registrations on one session never oversubscribe it
    - A session edit running alongside a registration never loses the seat it took
    - A new session never inherits the participant rows of a deleted one
"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.core.errors import (
    CapacityExceededError, InvalidInputError, RegistrationConflictError,
    ResourceNotFoundError, StoreError,
)
from app.core.registration import count_active_participants
from app.services.lifecycle_manager import SessionLifecycleManager
from app.services.registration_manager import RegistrationManager
from factories import make_participant, make_session

A, B, C = 101, 102, 103


async def _seed_session(stores, max_participants=2, **kwargs):
    session = make_session(session_id=None, max_participants=max_participants, **kwargs)
    await stores.sessions.insert(session)
    await stores.commit()
    return session.id


async def _assert_counter_consistent(stores, session_id):
    session = await stores.sessions.get_by_id(session_id)
    participants = await stores.participants.list_all()
    assert session.current_participants == count_active_participants(
        participants, session_id,
    )
    assert 0 <= session.current_participants <= session.max_participants
    return session


async def test_capacity_scenario(stores, clock):
    session_id = await _seed_session(stores, max_participants=2)
    manager = RegistrationManager(stores, clock)

    await manager.register(A, session_id)
    await manager.register(B, session_id)
    with pytest.raises(CapacityExceededError):
        await manager.register(C, session_id)

    assert await manager.unregister(A, session_id) is True
    await manager.register(C, session_id)

    session = await _assert_counter_consistent(stores, session_id)
    assert session.current_participants == 2
    registered = {p.user_id for p in await manager.list_participants(session_id)}
    assert registered == {B, C}


async def test_duplicate_registration_rejected_once_counted(stores, clock):
    session_id = await _seed_session(stores, max_participants=5)
    manager = RegistrationManager(stores, clock)

    await manager.register(A, session_id)
    with pytest.raises(RegistrationConflictError):
        await manager.register(A, session_id)

    session = await _assert_counter_consistent(stores, session_id)
    assert session.current_participants == 1


async def test_register_unknown_session_is_not_found(stores, clock):
    manager = RegistrationManager(stores, clock)
    with pytest.raises(ResourceNotFoundError):
        await manager.register(A, 999)


async def test_unregister_without_registration_returns_false(stores, clock):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)

    assert await manager.unregister(A, session_id) is False

    session = await stores.sessions.get_by_id(session_id)
    assert session.current_participants == 0


async def test_register_sets_timestamps_from_clock(stores, clock):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)

    participant = await manager.register(A, session_id)

    assert participant.id is not None
    assert participant.status == "registered"
    assert participant.registered_at == clock.now()
    session = await stores.sessions.get_by_id(session_id)
    assert session.updated_at == clock.now()


async def test_status_changes_follow_active_boundary(stores, clock):
    session_id = await _seed_session(stores, max_participants=1)
    manager = RegistrationManager(stores, clock)
    await manager.register(A, session_id)

    attended = await manager.update_participant_status(A, session_id, "attended")
    assert attended.attended_at == clock.now()
    assert (await _assert_counter_consistent(stores, session_id)).current_participants == 1

    await manager.update_participant_status(A, session_id, "no-show")
    assert (await _assert_counter_consistent(stores, session_id)).current_participants == 0

    await manager.register(B, session_id)
    with pytest.raises(CapacityExceededError):
        await manager.update_participant_status(A, session_id, "registered")
    await _assert_counter_consistent(stores, session_id)


async def test_status_update_unknown_participant_is_not_found(stores, clock):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)
    with pytest.raises(ResourceNotFoundError):
        await manager.update_participant_status(A, session_id, "attended")


async def test_status_update_rejects_unknown_status(stores, clock):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)
    await manager.register(A, session_id)
    with pytest.raises(InvalidInputError):
        await manager.update_participant_status(A, session_id, "late")


async def test_failed_counter_write_rolls_back_registration(stores, clock, monkeypatch):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)
    monkeypatch.setattr(
        stores.sessions, "update",
        AsyncMock(side_effect=StoreError("disk full", "training_sessions")),
    )

    with pytest.raises(StoreError):
        await manager.register(A, session_id)

    assert await stores.participants.list_all() == []
    session = await stores.sessions.get_by_id(session_id)
    assert session.current_participants == 0


async def test_failed_counter_write_restores_unregistered_row(stores, clock, monkeypatch):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)
    await manager.register(A, session_id)
    monkeypatch.setattr(
        stores.sessions, "update",
        AsyncMock(side_effect=StoreError("disk full", "training_sessions")),
    )

    with pytest.raises(StoreError):
        await manager.unregister(A, session_id)

    participants = await stores.participants.list_all()
    assert [(p.user_id, p.status) for p in participants] == [(A, "registered")]
    session = await stores.sessions.get_by_id(session_id)
    assert session.current_participants == 1


async def test_concurrent_registrations_never_oversubscribe(stores, clock):
    session_id = await _seed_session(stores, max_participants=3)
    manager = RegistrationManager(stores, clock)

    results = await asyncio.gather(
        *(manager.register(user_id, session_id) for user_id in range(1, 9)),
        return_exceptions=True,
    )

    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 3
    assert all(isinstance(f, CapacityExceededError) for f in failures)
    session = await _assert_counter_consistent(stores, session_id)
    assert session.current_participants == 3


async def test_recount_repairs_drift(stores, clock):
    session_id = await _seed_session(stores, max_participants=1)
    for user_id in (A, B):
        await stores.participants.insert(make_participant(user_id, session_id=session_id))
    await stores.commit()
    manager = RegistrationManager(stores, clock)

    session = await manager.recount(session_id)

    assert session.current_participants == 2
    assert session.max_participants == 2
    await _assert_counter_consistent(stores, session_id)


async def test_list_registered_sessions_only_active(stores, clock):
    first = await _seed_session(stores, start_in_days=3)
    second = await _seed_session(stores, start_in_days=1)
    manager = RegistrationManager(stores, clock)
    await manager.register(A, first)
    await manager.register(A, second)
    await manager.update_participant_status(A, first, "cancelled")

    sessions = await manager.list_registered_sessions(A)

    assert [s.id for s in sessions] == [second]


async def test_reactivating_row_of_deleted_session_is_not_found(stores, clock):
    session_id = await _seed_session(stores)
    manager = RegistrationManager(stores, clock)
    await manager.register(A, session_id)
    await manager.update_participant_status(A, session_id, "cancelled")
    await stores.sessions.delete(session_id)
    await stores.commit()

    with pytest.raises(ResourceNotFoundError):
        await manager.update_participant_status(A, session_id, "registered")

    participants = await stores.participants.list_all()
    assert [p.status for p in participants] == ["cancelled"]


async def test_new_session_after_delete_starts_without_participants(stores, clock):
    sessions = SessionLifecycleManager(stores, clock)
    manager = RegistrationManager(stores, clock)
    start = clock.now() + timedelta(days=7)
    first = await sessions.create("Onboarding", start, start + timedelta(hours=2), "Alice", 5)
    await manager.register(A, first.id)
    assert await sessions.delete(first.id) is True

    second = await sessions.create("Onboarding", start, start + timedelta(hours=2), "Alice", 5)

    assert second.id != first.id
    assert await manager.list_participants(second.id) == []
    await manager.register(A, second.id)
    session = await _assert_counter_consistent(stores, second.id)
    assert session.current_participants == 1


async def test_session_edit_keeps_concurrent_registration(stores, clock, monkeypatch):
    session_id = await _seed_session(stores, max_participants=3)
    existing = await stores.sessions.get_by_id(session_id)
    sessions = SessionLifecycleManager(stores, clock)
    manager = RegistrationManager(stores, clock)

    read_session = stores.sessions.get_by_id
    slowed = []

    async def slow_first_read(entity_id):
        found = await read_session(entity_id)
        if not slowed:
            slowed.append(entity_id)
            await asyncio.sleep(0.05)
        return found

    monkeypatch.setattr(stores.sessions, "get_by_id", slow_first_read)

    await asyncio.gather(
        sessions.update(
            session_id, "Python Basics (room change)", existing.start_date,
            existing.end_date, existing.trainer, 3, "scheduled", location="Room 2",
        ),
        manager.register(A, session_id),
    )

    session = await _assert_counter_consistent(stores, session_id)
    assert session.current_participants == 1
    assert session.location == "Room 2"
