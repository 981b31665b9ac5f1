"""Luchadeer Proxy - caching reverse proxy for the Giant Bomb and YouTube APIs.

This package provides a layered architecture for the proxy:

Layers:
    - protocols: Interface contracts (CacheStore, UpstreamClient, PreferenceStore, ProviderAdapter)
    - providers: One ProviderAdapter per upstream API
    - repositories: Redis, in-memory and httpx implementations
    - services: Proxy orchestration and preference updates
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (external contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from luchadeer.repositories import HttpxUpstreamClient, RedisCacheStore
    from luchadeer.routes import build_routes
    from luchadeer.services import ProxyService

    proxy = ProxyService.create(RedisCacheStore.create(), HttpxUpstreamClient.create())
    routes = build_routes(settings)
    ```

For HTTP API:
    ```python
    from luchadeer.api.app import app
    ```
"""

from luchadeer.config import get_redis_client, settings
from luchadeer.entities import NormalizedRequest, ProxyResult, RouteConfig
from luchadeer.exceptions import (
    CacheBackendError,
    InvalidQueryParameter,
    ProxyError,
    UpstreamParseError,
    UpstreamTransportError,
)
from luchadeer.protocols import CacheStore, PreferenceStore, ProviderAdapter, UpstreamClient
from luchadeer.providers import GiantBombAdapter, YouTubeAdapter
from luchadeer.repositories import HttpxUpstreamClient, MemoryCacheStore, RedisCacheStore, RedisPreferenceStore
from luchadeer.routes import ProxyRoute, build_routes
from luchadeer.services import PreferenceService, ProxyService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "PreferenceStore",
    "ProviderAdapter",
    "UpstreamClient",
    # Providers
    "GiantBombAdapter",
    "YouTubeAdapter",
    # Routes
    "ProxyRoute",
    "build_routes",
    # Services (business logic)
    "PreferenceService",
    "ProxyService",
    # Repositories
    "HttpxUpstreamClient",
    "MemoryCacheStore",
    "RedisCacheStore",
    "RedisPreferenceStore",
    # Entities
    "NormalizedRequest",
    "ProxyResult",
    "RouteConfig",
    # Exceptions
    "CacheBackendError",
    "InvalidQueryParameter",
    "ProxyError",
    "UpstreamParseError",
    "UpstreamTransportError",
]
