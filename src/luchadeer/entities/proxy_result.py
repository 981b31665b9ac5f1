"""Proxy result entity."""

from dataclasses import dataclass
from enum import Enum


class CacheStatus(str, Enum):
    """Where a served body came from."""

    HIT = "HIT"
    MISS = "MISS"
    BYPASS = "BYPASS"


@dataclass(frozen=True)
class ProxyResult:
    """Body served for a proxied request.

    Attributes:
        body: Bytes to write to the client, unmodified upstream bytes on HIT/MISS
        ttl: Seconds the body was stored for on a MISS, 0 on a HIT or BYPASS
        cache_status: HIT, MISS, or BYPASS for disabled routes
        key: The cache key, None when the route is disabled
    """

    body: bytes
    ttl: int
    cache_status: CacheStatus
    key: str | None = None
