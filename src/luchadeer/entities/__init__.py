"""Domain entities for internal representation.

These are frozen dataclasses used internally by services, providers
and repositories. They are NOT used for API contracts - use DTOs from
the dto package for that.
"""

from .cache_entry import CacheEntry
from .normalized_request import NormalizedRequest
from .preference import NotificationPreference
from .proxy_result import CacheStatus, ProxyResult
from .route_config import Predicate, RouteConfig
from .upstream_response import UpstreamResponse

__all__ = [
    "CacheEntry",
    "CacheStatus",
    "NormalizedRequest",
    "NotificationPreference",
    "Predicate",
    "ProxyResult",
    "RouteConfig",
    "UpstreamResponse",
]
