"""Keyed asyncio locks used to serialise work on one aggregate or ledger day"""
import asyncio
from contextlib import asynccontextmanager
from typing import Dict, Hashable, Iterable, List


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = asyncio.Lock()
        self.holders = 0


class KeyedLocks:
    """One asyncio.Lock per key, kept only while someone holds or awaits it.

    hold() takes several locks in sorted key order so that two callers
    needing overlapping key sets can never deadlock. The registry entry
    for a key is dropped when its last holder or waiter leaves, so the
    registry never grows past the number of keys in use.
    """

    def __init__(self):
        self._locks: Dict[Hashable, _Entry] = {}

    def _checkout(self, key: Hashable) -> _Entry:
        entry = self._locks.get(key)
        if entry is None:
            entry = _Entry()
            self._locks[key] = entry
        entry.holders += 1
        return entry

    def _checkin(self, key: Hashable, entry: _Entry) -> None:
        entry.holders -= 1
        if entry.holders == 0 and self._locks.get(key) is entry:
            del self._locks[key]

    @asynccontextmanager
    async def hold(self, keys: Iterable[Hashable]):
        ordered = sorted(set(keys))
        checked_out: List = []
        acquired: List[asyncio.Lock] = []
        try:
            for key in ordered:
                entry = self._checkout(key)
                checked_out.append((key, entry))
                await entry.lock.acquire()
                acquired.append(entry.lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key, entry in reversed(checked_out):
                self._checkin(key, entry)

    def is_locked(self, key: Hashable) -> bool:
        entry = self._locks.get(key)
        return entry is not None and entry.lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
