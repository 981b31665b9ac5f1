"""Upstream provider adapters.

One adapter per upstream API. Each satisfies the ProviderAdapter
protocol through structural typing:

    normalize -> derive_key -> (fetch) -> process_response

Adapters are built once per route at startup and hold that route's
RouteConfig.
"""

from .giantbomb import GIANTBOMB_PUBLIC_PREFIX, GiantBombAdapter
from .youtube import YOUTUBE_PUBLIC_PATH, YouTubeAdapter

__all__ = [
    "GIANTBOMB_PUBLIC_PREFIX",
    "GiantBombAdapter",
    "YOUTUBE_PUBLIC_PATH",
    "YouTubeAdapter",
]
