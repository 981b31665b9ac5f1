"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> in-memory, httpx -> a test transport)
- Unit testing with fake implementations
- One variant per upstream provider without a shared base class

Usage:
    ```python
    from luchadeer.protocols import CacheStore, ProviderAdapter

    store: CacheStore = RedisCacheStore.create()    # works
    store: CacheStore = MemoryCacheStore()           # also works
    ```
"""

from .cache_store import CacheStore
from .preference_store import PreferenceStore
from .provider_adapter import ProviderAdapter
from .upstream_client import UpstreamClient

__all__ = [
    "CacheStore",
    "PreferenceStore",
    "ProviderAdapter",
    "UpstreamClient",
]
