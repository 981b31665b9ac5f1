"""Caching proxy service.

Request lifecycle:

    normalize -> derive key -> cache lookup
        hit:  serve cached bytes
        miss: fetch upstream -> process response -> store -> serve

A rejected normalization never reaches the cache or upstream. Upstream
and parse failures are terminal for the request and cache nothing. Cache
errors never fail a request: a failed lookup is treated as a miss and a
failed store is logged and ignored.

There is no retrying and no coalescing of concurrent identical requests;
two simultaneous misses for the same key both fetch upstream.
"""

import structlog

from luchadeer.dto import DisabledEnvelope
from luchadeer.entities import CacheStatus, ProxyResult
from luchadeer.exceptions import CacheBackendError, InvalidQueryParameter, UpstreamParseError, UpstreamTransportError
from luchadeer.protocols import CacheStore, UpstreamClient
from luchadeer.routes import ProxyRoute

log = structlog.get_logger(__name__)

# Served for disabled routes. Never cached.
DISABLED_BODY: bytes = DisabledEnvelope().model_dump_json().encode()


class ProxyService:
    """Core proxy orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: Redis, in-memory, ...
    - UpstreamClient: httpx, a test transport, ...

    Route policy lives in each route's ProviderAdapter; the service only
    sequences the steps.
    """

    def __init__(self, cache_store: CacheStore, upstream_client: UpstreamClient) -> None:
        """Initialize the proxy service.

        Args:
            cache_store: Ephemeral key/value store for upstream bodies (required).
            upstream_client: Outbound HTTP client (required).
        """
        self._cache = cache_store
        self._upstream = upstream_client

    @classmethod
    def create(cls, cache_store: CacheStore, upstream_client: UpstreamClient) -> "ProxyService":
        """Factory method to create ProxyService.

        Args:
            cache_store: Cache backend (required).
            upstream_client: Upstream HTTP client (required).

        Returns:
            Configured ProxyService instance
        """
        return cls(cache_store=cache_store, upstream_client=upstream_client)

    async def handle(self, route: ProxyRoute, url: str) -> ProxyResult:
        """Serve one proxied GET request.

        Args:
            route: The matched route
            url: The inbound request URL (path plus query string)

        Returns:
            ProxyResult with the bytes to serve

        Raises:
            InvalidQueryParameter: If the request is rejected during normalization
            UpstreamTransportError: If the upstream fetch fails
            UpstreamParseError: If the upstream body is not the expected envelope
        """
        if not route.enabled:
            log.info("proxy.disabled", route=route.name)
            return ProxyResult(body=DISABLED_BODY, ttl=0, cache_status=CacheStatus.BYPASS)

        adapter = route.adapter

        try:
            request = adapter.normalize(url)
        except InvalidQueryParameter as e:
            log.info("proxy.rejected", route=route.name, param=e.param)
            raise

        key = adapter.derive_key(request)

        cached = await self._lookup(key, route.name)
        if cached is not None:
            log.info("cache.hit", route=route.name, path=request.path)
            return ProxyResult(body=cached, ttl=0, cache_status=CacheStatus.HIT, key=key)

        log.info("upstream.fetch", route=route.name, host=request.host, path=request.path)
        try:
            response = await self._upstream.get(request.url)
        except UpstreamTransportError as e:
            log.error("upstream.fetch.failed", route=route.name, error=str(e))
            raise

        try:
            body, ttl = adapter.process_response(response)
        except UpstreamParseError:
            log.error("upstream.process.failed", route=route.name, http_status=response.status_code)
            raise

        await self._store(key, body, ttl, route.name)
        return ProxyResult(body=body, ttl=ttl, cache_status=CacheStatus.MISS, key=key)

    async def _lookup(self, key: str, route_name: str) -> bytes | None:
        try:
            return await self._cache.get(key)
        except CacheBackendError as e:
            log.warning("cache.lookup.failed", route=route_name, error=str(e))
            return None

    async def _store(self, key: str, body: bytes, ttl: int, route_name: str) -> None:
        try:
            await self._cache.set(key, body, ttl)
        except CacheBackendError as e:
            log.warning("cache.store.failed", route=route_name, error=str(e))
            return
        log.info("cache.stored", route=route_name, ttl=ttl, size=len(body))

    async def is_healthy(self) -> bool:
        """Check if the cache backend is reachable."""
        return await self._cache.health_check()
