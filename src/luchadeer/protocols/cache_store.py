"""Cache storage protocol.

Defines the interface for the ephemeral key/value store that holds
upstream bodies. Entries expire after their TTL; losing entries early is
always acceptable.

Implementations:
- Redis (default)
- In-process memory (local development, tests)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    async def get(self, key: str) -> bytes | None:
        """Fetch a cached value.

        Args:
            key: The cache key

        Returns:
            The stored bytes, or None on a clean miss

        Raises:
            CacheBackendError: If the backend fails for any other reason
        """
        ...

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: The cache key
            value: Bytes to store
            ttl: Time-to-live in seconds

        Raises:
            CacheBackendError: If the write fails
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
