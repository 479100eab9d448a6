"""Per-key async locks.

Tasks for the same key run one at a time, in the order they asked for the
lock (``asyncio.Lock`` wakes waiters first-in, first-out).  Tasks for
different keys never wait on each other.

Locks are created on first use and dropped once no task holds or awaits
them, so the table stays as small as the set of keys currently in flight.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Hashable


class KeyedLocks:
    """A table of ``asyncio.Lock`` objects keyed by any hashable value."""

    __slots__ = ("_locks", "_users")

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._users: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __contains__(self, key: object) -> bool:
        return key in self._locks

    def __len__(self) -> int:
        return len(self._locks)
