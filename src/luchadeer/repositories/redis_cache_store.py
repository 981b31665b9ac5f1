"""Redis implementation of CacheStore.

Entries are plain string keys written with ``SET key value EX ttl``, so
expiry is owned by Redis and every write replaces the whole value.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from luchadeer.config import get_redis_client, settings
from luchadeer.exceptions import CacheBackendError


class RedisCacheStore:
    """Redis implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
            key_prefix: Namespace prepended to every key. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix if key_prefix is not None else settings.cache_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore with defaults.

        Args:
            key_prefix: Key namespace. If None, uses settings.

        Returns:
            Configured RedisCacheStore
        """
        return cls(key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}" if self._prefix else key

    async def get(self, key: str) -> bytes | None:
        try:
            return await self._client.get(self._key(key))
        except RedisError as e:
            raise CacheBackendError(f"Redis get failed: {e}") from e

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        if ttl <= 0:
            return
        try:
            await self._client.set(self._key(key), value, ex=ttl)
        except RedisError as e:
            raise CacheBackendError(f"Redis set failed: {e}") from e

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
