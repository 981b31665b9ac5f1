"""In-process implementation of CacheStore.

For local development without Redis and for tests. Entries live in a
dict and expire lazily: an expired entry is dropped the next time it is
read.
"""

import time
from collections.abc import Callable

from luchadeer.entities import CacheEntry


class MemoryCacheStore:
    """Dict-backed implementation of the CacheStore protocol."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock

    async def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.value

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        if ttl <= 0:
            return
        self._entries[key] = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl)

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
