"""
Shared fixtures: fake collaborators that satisfy the protocols in memory.
"""

import json

import pytest

from luchadeer.config import Settings
from luchadeer.entities import NotificationPreference, UpstreamResponse
from luchadeer.exceptions import CacheBackendError, UpstreamTransportError
from luchadeer.repositories import MemoryCacheStore
from luchadeer.routes import build_routes

GIANTBOMB_OK = json.dumps(
    {
        "status_code": 1,
        "error": "OK",
        "limit": 100,
        "offset": 0,
        "number_of_page_results": 1,
        "number_of_total_results": 1,
        "results": {"id": 4725, "name": "Deadly Premonition"},
    },
    separators=(",", ":"),
).encode()

GIANTBOMB_INVALID_KEY = b'{"status_code":100,"error":"Invalid API Key","results":[]}'


class FakeUpstreamClient:
    """UpstreamClient returning canned responses and recording every URL."""

    def __init__(self, body: bytes = GIANTBOMB_OK, status_code: int = 200, error: Exception | None = None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.calls: list[str] = []

    async def get(self, url: str) -> UpstreamResponse:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return UpstreamResponse(status_code=self.status_code, body=self.body)


class BrokenCacheStore:
    """CacheStore whose backend is down."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.writes: list[tuple[str, bytes, int]] = []

    async def get(self, key: str) -> bytes | None:
        if self.fail_get:
            raise CacheBackendError("connection refused")
        return None

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        if self.fail_set:
            raise CacheBackendError("connection refused")
        self.writes.append((key, value, ttl))

    async def health_check(self) -> bool:
        return False


class FakePreferenceStore:
    """PreferenceStore keeping records in a dict keyed by registration id."""

    def __init__(self):
        self.records: dict[str, NotificationPreference] = {}

    async def upsert(self, preference: NotificationPreference) -> NotificationPreference:
        self.records[preference.registration_id] = preference
        return preference

    async def subscriptions(self, category: str) -> list[NotificationPreference]:
        return [p for p in self.records.values() if category in p.categories]


@pytest.fixture
def settings() -> Settings:
    """Settings with fixed keys and hosts."""
    return Settings(
        giantbomb_proxy_api_key="GBKEY",
        giantbomb_host="www.giantbomb.com",
        giantbomb_api_path="/api",
        youtube_api_key="YTKEY",
        youtube_unarchived_channel_id="CHANNEL",
        youtube_api_host="www.googleapis.com",
        youtube_search_path="/youtube/v3/search",
        upstream_scheme="https",
        proxy_requests_enabled=True,
        search_proxy_enabled=True,
        default_cache_ttl=86400,
        list_request_cache_ttl=3600,
        game_detail_cache_ttl=86400,
        video_detail_cache_ttl=604800,
        bad_request_cache_ttl=3600,
        page_size=100,
        client_download_url="",
    )


@pytest.fixture
def routes(settings):
    """Route table keyed by route name."""
    return {route.name: route for route in build_routes(settings)}


@pytest.fixture
def cache_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def upstream() -> FakeUpstreamClient:
    return FakeUpstreamClient()


@pytest.fixture
def preference_store() -> FakePreferenceStore:
    return FakePreferenceStore()
