"""Session Locks — one asyncio.Lock per training session, shared by every writer.

Invariants:
    - Any read-modify-write of a session row (seat counter, full replace, delete)
      runs under session_lock(session_id)
    - Locks are bound to the running event loop, so one set is kept per loop
"""

import asyncio
import weakref

from app.core.domain_types import TrainingSessionId

_session_locks: (
    "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[TrainingSessionId, asyncio.Lock]]"
) = weakref.WeakKeyDictionary()


def session_lock(session_id: TrainingSessionId) -> asyncio.Lock:
    locks = _session_locks.setdefault(asyncio.get_running_loop(), {})
    lock = locks.get(session_id)
    if lock is None:
        lock = asyncio.Lock()
        locks[session_id] = lock
    return lock
