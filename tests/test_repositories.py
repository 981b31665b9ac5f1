"""
Tests for the repository implementations (cache stores, upstream client,
preference store).
"""

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError, WatchError

from luchadeer.entities import NotificationPreference
from luchadeer.exceptions import CacheBackendError, UpstreamTransportError
from luchadeer.repositories import HttpxUpstreamClient, MemoryCacheStore, RedisCacheStore, RedisPreferenceStore


class StubRedis:
    """Just enough of redis.asyncio.Redis for the repositories."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.values: dict[str, bytes] = {}
        self.sets: dict[str, set[bytes]] = {}
        self.expiries: dict[str, int] = {}
        self.versions: dict[str, int] = {}
        # Awaited once, right after the next WATCH, to stage a concurrent writer.
        self.on_watch = None

    def _check(self):
        if self.fail:
            raise RedisConnectionError("Connection refused")

    def _write(self, key, value):
        self.values[key] = value.encode() if isinstance(value, str) else value
        self.versions[key] = self.versions.get(key, 0) + 1

    async def get(self, key):
        self._check()
        return self.values.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self._write(key, value)
        if ex is not None:
            self.expiries[key] = ex
        return True

    async def smembers(self, key):
        self._check()
        return set(self.sets.get(key, set()))

    async def mget(self, keys):
        self._check()
        return [self.values.get(k) for k in keys]

    async def ping(self):
        self._check()
        return True

    def pipeline(self, transaction=True):
        return StubPipeline(self)


class StubPipeline:
    def __init__(self, client: StubRedis):
        self._client = client
        self._ops = []
        self._watched: dict[str, int] = {}
        self.attempts = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self._reset()

    def _reset(self):
        self._ops = []
        self._watched = {}

    async def watch(self, *keys):
        self._client._check()
        self.attempts += 1
        for key in keys:
            self._watched[key] = self._client.versions.get(key, 0)
        hook, self._client.on_watch = self._client.on_watch, None
        if hook is not None:
            await hook()

    async def get(self, key):
        return await self._client.get(key)

    def multi(self):
        pass

    def set(self, key, value):
        self._ops.append(lambda: self._client._write(key, value))
        return self

    def sadd(self, key, member):
        self._ops.append(lambda: self._client.sets.setdefault(key, set()).add(member.encode()))
        return self

    def srem(self, key, member):
        self._ops.append(lambda: self._client.sets.get(key, set()).discard(member.encode()))
        return self

    async def execute(self):
        self._client._check()
        try:
            if any(self._client.versions.get(k, 0) != v for k, v in self._watched.items()):
                raise WatchError("Watched variable changed.")
            for op in self._ops:
                op()
            return [True] * len(self._ops)
        finally:
            self._reset()


# MemoryCacheStore


@pytest.mark.asyncio
async def test_memory_store_round_trip():
    store = MemoryCacheStore()
    await store.set("giantbomb//api/game/1/", b"\x00body\xff", 60)
    assert await store.get("giantbomb//api/game/1/") == b"\x00body\xff"


@pytest.mark.asyncio
async def test_memory_store_miss_and_zero_ttl():
    """Missing keys are a clean miss; a zero TTL is never written."""
    store = MemoryCacheStore()
    await store.set("key", b"value", 0)

    assert await store.get("key") is None
    assert "key" not in store


@pytest.mark.asyncio
async def test_memory_store_lazy_expiry():
    now = [100.0]
    store = MemoryCacheStore(clock=lambda: now[0])
    await store.set("key", b"value", 10)

    now[0] = 110.0
    assert await store.get("key") is None
    assert len(store) == 0


# RedisCacheStore


@pytest.mark.asyncio
async def test_redis_store_prefixes_keys_and_sets_expiry():
    client = StubRedis()
    store = RedisCacheStore(redis_client=client, key_prefix="luchadeer")

    await store.set("youtube//youtube/v3/search?q=x", b"{}", 86400)

    assert client.values == {"luchadeer:youtube//youtube/v3/search?q=x": b"{}"}
    assert client.expiries["luchadeer:youtube//youtube/v3/search?q=x"] == 86400
    assert await store.get("youtube//youtube/v3/search?q=x") == b"{}"


@pytest.mark.asyncio
async def test_redis_store_translates_backend_errors():
    """Redis failures surface as CacheBackendError, never as a miss."""
    store = RedisCacheStore(redis_client=StubRedis(fail=True), key_prefix="luchadeer")

    with pytest.raises(CacheBackendError):
        await store.get("key")
    with pytest.raises(CacheBackendError):
        await store.set("key", b"value", 60)
    assert await store.health_check() is False


# HttpxUpstreamClient


@pytest.mark.asyncio
async def test_upstream_client_returns_raw_bytes():
    body = b'{"status_code": 1,   "results": []}'

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "www.giantbomb.com"
        return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

    client = HttpxUpstreamClient(timeout=5.0, transport=httpx.MockTransport(handler))
    response = await client.get("https://www.giantbomb.com/api/video_types/?api_key=GBKEY&format=json")
    await client.close()

    assert response.status_code == 200
    assert response.body == body
    assert response.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_upstream_client_passes_through_error_statuses():
    """Non-2xx responses are returned, not raised; the adapter decides."""
    client = HttpxUpstreamClient(timeout=5.0, transport=httpx.MockTransport(lambda r: httpx.Response(404, content=b"{}")))
    response = await client.get("https://www.giantbomb.com/api/game/0/")
    await client.close()

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upstream_client_wraps_transport_errors():
    """Network failures become UpstreamTransportError without leaking the API key."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = HttpxUpstreamClient(timeout=5.0, transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamTransportError) as exc_info:
        await client.get("https://www.giantbomb.com/api/games/?api_key=SECRET&format=json")
    await client.close()

    assert "SECRET" not in str(exc_info.value)
    assert "https://www.giantbomb.com/api/games/" in str(exc_info.value)


# RedisPreferenceStore


@pytest.mark.asyncio
async def test_preference_upsert_is_idempotent():
    client = StubRedis()
    store = RedisPreferenceStore(redis_client=client, key_prefix="luchadeer")
    preference = NotificationPreference(registration_id="device-1", categories=["Quick Looks", "Quick Looks"])

    await store.upsert(preference)
    stored = await store.upsert(preference)

    assert stored.categories == ["Quick Looks"]
    assert stored.last_updated is not None
    assert [p.registration_id for p in await store.subscriptions("Quick Looks")] == ["device-1"]
    assert len([k for k in client.values if k.startswith("luchadeer:preference:")]) == 1


@pytest.mark.asyncio
async def test_preference_upsert_moves_dropped_categories():
    store = RedisPreferenceStore(redis_client=StubRedis(), key_prefix="luchadeer")

    await store.upsert(NotificationPreference(registration_id="device-1", categories=["Reviews", "live"]))
    await store.upsert(NotificationPreference(registration_id="device-1", categories=["live"]))

    assert await store.subscriptions("Reviews") == []
    live = await store.subscriptions("live")
    assert [p.categories for p in live] == [["live"]]


@pytest.mark.asyncio
async def test_preference_subscriptions_for_unknown_category():
    store = RedisPreferenceStore(redis_client=StubRedis(), key_prefix="luchadeer")
    assert await store.subscriptions("Trailers") == []


@pytest.mark.asyncio
async def test_preference_upsert_retries_after_concurrent_write():
    """A write landing between WATCH and EXEC makes the upsert start over."""
    client = StubRedis()
    store = RedisPreferenceStore(redis_client=client, key_prefix="luchadeer")

    async def concurrent_upsert():
        await store.upsert(NotificationPreference(registration_id="device-1", categories=["Trailers"]))

    client.on_watch = concurrent_upsert
    await store.upsert(NotificationPreference(registration_id="device-1", categories=["Reviews"]))

    assert client.sets["luchadeer:subscribers:Trailers"] == set()
    assert client.sets["luchadeer:subscribers:Reviews"] == {b"device-1"}
    assert await store.subscriptions("Trailers") == []
    assert [p.categories for p in await store.subscriptions("Reviews")] == [["Reviews"]]


@pytest.mark.asyncio
async def test_preference_subscriptions_skip_stale_members():
    """A set member whose document no longer lists the category is not returned."""
    client = StubRedis()
    store = RedisPreferenceStore(redis_client=client, key_prefix="luchadeer")
    await store.upsert(NotificationPreference(registration_id="device-1", categories=["live"]))
    client.sets.setdefault("luchadeer:subscribers:Reviews", set()).add(b"device-1")

    assert await store.subscriptions("Reviews") == []
    assert [p.registration_id for p in await store.subscriptions("live")] == ["device-1"]
