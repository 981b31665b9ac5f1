"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Provider adapter / Repository
    (HTTP)  -> (Policy) -> (Upstream, Cache, Store)

Usage:
    ```python
    from luchadeer.services import ProxyService

    proxy = ProxyService.create(cache_store=store, upstream_client=client)
    result = await proxy.handle(route, "/api/1/giantbomb/game/3030-4725/")
    ```
"""

from .preference_service import PreferenceService
from .proxy_service import DISABLED_BODY, ProxyService

__all__ = [
    "DISABLED_BODY",
    "PreferenceService",
    "ProxyService",
]
