"""Repository layer for external collaborators.

This layer wraps the cache backend, the preference store and outbound
HTTP behind the protocols in ``luchadeer.protocols``. Library errors are
translated into the proxy's own exceptions here and nowhere else.

The repositories are protocol-based (structural typing), not
inheritance-based.
"""

from luchadeer.protocols import CacheStore, PreferenceStore, UpstreamClient

from .httpx_upstream_client import HttpxUpstreamClient
from .memory_cache_store import MemoryCacheStore
from .redis_cache_store import RedisCacheStore
from .redis_preference_store import RedisPreferenceStore

__all__ = [
    "CacheStore",
    "PreferenceStore",
    "UpstreamClient",
    "HttpxUpstreamClient",
    "MemoryCacheStore",
    "RedisCacheStore",
    "RedisPreferenceStore",
]
