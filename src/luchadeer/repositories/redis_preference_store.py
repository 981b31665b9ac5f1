"""Redis implementation of PreferenceStore.

Layout:
    <prefix>:preference:<registration_id>  JSON document, one per device
    <prefix>:subscribers:<category>        set of registration ids

The category sets are the index the push fan-out reads; an upsert moves
a device out of categories it dropped.
"""

import json
from datetime import datetime, timezone

import redis.asyncio as redis
import structlog
from redis.exceptions import RedisError, WatchError

from luchadeer.config import get_redis_client, settings
from luchadeer.entities import NotificationPreference

log = structlog.get_logger(__name__)


class RedisPreferenceStore:
    """Redis implementation of the PreferenceStore protocol."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the preference store.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
            key_prefix: Namespace prepended to every key. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix if key_prefix is not None else settings.cache_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisPreferenceStore":
        return cls(key_prefix=key_prefix)

    def _preference_key(self, registration_id: str) -> str:
        return f"{self._prefix}:preference:{registration_id}"

    def _subscribers_key(self, category: str) -> str:
        return f"{self._prefix}:subscribers:{category}"

    async def upsert(self, preference: NotificationPreference) -> NotificationPreference:
        """Create or replace the preference for a registration id.

        The previous document is read under WATCH. A concurrent upsert for
        the same device makes this one start over.

        Raises:
            RedisError: If Redis is unreachable
        """
        categories = list(dict.fromkeys(preference.categories))
        stored = NotificationPreference(
            registration_id=preference.registration_id,
            categories=categories,
            last_updated=datetime.now(timezone.utc),
        )
        key = self._preference_key(stored.registration_id)

        async with self._client.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    raw = await pipe.get(key)
                    previous = _decode(raw) if raw is not None else None
                    dropped = set(previous.categories) - set(categories) if previous else set()

                    pipe.multi()
                    pipe.set(key, _encode(stored))
                    for category in dropped:
                        pipe.srem(self._subscribers_key(category), stored.registration_id)
                    for category in categories:
                        pipe.sadd(self._subscribers_key(category), stored.registration_id)
                    await pipe.execute()
                    break
                except WatchError:
                    log.info("preferences.upsert.retry")
                    continue

        log.info(
            "preferences.updated",
            categories=categories,
            dropped=sorted(dropped),
        )
        return stored

    async def subscriptions(self, category: str) -> list[NotificationPreference]:
        members = await self._client.smembers(self._subscribers_key(category))
        if not members:
            return []

        ids = sorted(m.decode() if isinstance(m, bytes) else m for m in members)
        documents = await self._client.mget([self._preference_key(i) for i in ids])

        preferences = []
        for raw in documents:
            if raw is None:
                log.warning("preferences.dangling_subscriber", category=category)
                continue
            preference = _decode(raw)
            # The document is authoritative over the set index.
            if category not in preference.categories:
                log.warning("preferences.stale_subscriber", category=category)
                continue
            preferences.append(preference)
        return preferences

    async def health_check(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()


def _encode(preference: NotificationPreference) -> str:
    return json.dumps(
        {
            "registration_id": preference.registration_id,
            "categories": preference.categories,
            "last_updated": preference.last_updated.isoformat() if preference.last_updated else None,
        }
    )


def _decode(raw: bytes | str) -> NotificationPreference:
    data = json.loads(raw)
    last_updated = data.get("last_updated")
    return NotificationPreference(
        registration_id=data["registration_id"],
        categories=list(data.get("categories") or []),
        last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
    )
