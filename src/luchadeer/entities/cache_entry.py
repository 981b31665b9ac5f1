"""Cache entry domain entity."""

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntry:
    """A cached upstream body.

    Entries are never mutated in place; a write replaces the whole entry.

    Attributes:
        key: The derived cache key
        value: The byte-exact upstream body
        expires_at: Unix timestamp after which the entry is treated as absent
    """

    key: str
    value: bytes
    expires_at: float

    def is_expired(self, now: float | None = None) -> bool:
        """Check whether the entry has outlived its TTL."""
        return (now if now is not None else time.time()) >= self.expires_at
