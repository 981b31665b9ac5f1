"""Proxied route table.

The table is built once at startup from Settings and never mutated.
Adding a route means adding a row here; the API layer registers every
row the same way.
"""

from dataclasses import dataclass

from luchadeer.config import Settings
from luchadeer.entities import RouteConfig
from luchadeer.protocols import ProviderAdapter
from luchadeer.providers import GIANTBOMB_PUBLIC_PREFIX, YOUTUBE_PUBLIC_PATH, GiantBombAdapter, YouTubeAdapter
from luchadeer.validators import exactly, integer_in, page_aligned_offset, single_value

# Giant Bomb video categories clients may filter on.
VIDEO_CATEGORIES: dict[int, str] = {
    2: "Reviews",
    3: "Quick Looks",
    4: "TANG",
    5: "Endurance Run",
    6: "Events",
    7: "Trailers",
    8: "Features",
    10: "Subscriber",
    11: "Extra Life",
    12: "Encyclopedia Bombastica",
    13: "Unfinished",
}

GAME_LIST_SORT = "date_added:desc"

# The one resource combination the client searches with.
SEARCH_RESOURCES = "game,video,"


@dataclass(frozen=True)
class ProxyRoute:
    """One proxied endpoint.

    Attributes:
        name: Route identifier used in logs
        public_path: Path clients request
        adapter: Provider adapter holding the route's policy
        subtree: Whether everything below public_path is served (e.g. game/<id>/)
        enabled: False serves the disabled envelope instead of proxying
    """

    name: str
    public_path: str
    adapter: ProviderAdapter
    subtree: bool = True
    enabled: bool = True


def build_route_configs(settings: Settings) -> dict[str, RouteConfig]:
    """Build the validation and TTL policy for every route."""
    offset = page_aligned_offset(settings.page_size)

    return {
        "videos": RouteConfig(
            allowed_params={
                "offset": offset,
                # Validated, but Giant Bomb has no such filter; it has no effect upstream.
                "video_type": integer_in(VIDEO_CATEGORIES),
            },
            ttl=settings.list_request_cache_ttl,
        ),
        "video": RouteConfig(ttl=settings.video_detail_cache_ttl),
        "games": RouteConfig(
            allowed_params={
                "offset": offset,
                "sort": exactly(GAME_LIST_SORT),
            },
            ttl=settings.list_request_cache_ttl,
        ),
        "game": RouteConfig(ttl=settings.game_detail_cache_ttl),
        "video_types": RouteConfig(ttl=settings.default_cache_ttl),
        "search": RouteConfig(
            allowed_params={
                "query": single_value,
                "resources": exactly(SEARCH_RESOURCES),
            },
            ttl=settings.default_cache_ttl,
        ),
        "unarchived_videos": RouteConfig(
            allowed_params={
                "q": single_value,
                "pageToken": single_value,
            },
            ttl=settings.default_cache_ttl,
        ),
    }


def build_routes(settings: Settings) -> tuple[ProxyRoute, ...]:
    """Build the immutable route table.

    Args:
        settings: Application settings (keys, hosts, TTLs, feature flags)

    Returns:
        Every proxied route, in registration order
    """
    configs = build_route_configs(settings)

    def giantbomb(name: str, enabled: bool = True) -> ProxyRoute:
        adapter = GiantBombAdapter(
            configs[name],
            api_key=settings.giantbomb_proxy_api_key,
            host=settings.giantbomb_host,
            api_path=settings.giantbomb_api_path,
            scheme=settings.upstream_scheme,
            bad_request_ttl=settings.bad_request_cache_ttl,
        )
        return ProxyRoute(
            name=name,
            public_path=f"{GIANTBOMB_PUBLIC_PREFIX}/{name}/",
            adapter=adapter,
            enabled=settings.proxy_requests_enabled and enabled,
        )

    youtube = YouTubeAdapter(
        configs["unarchived_videos"],
        api_key=settings.youtube_api_key,
        channel_id=settings.youtube_unarchived_channel_id,
        host=settings.youtube_api_host,
        search_path=settings.youtube_search_path,
        scheme=settings.upstream_scheme,
    )

    return (
        giantbomb("videos"),
        giantbomb("video"),
        giantbomb("games"),
        giantbomb("game"),
        giantbomb("video_types"),
        giantbomb("search", enabled=settings.search_proxy_enabled),
        ProxyRoute(
            name="unarchived_videos",
            public_path=YOUTUBE_PUBLIC_PATH,
            adapter=youtube,
            subtree=False,
            enabled=settings.proxy_requests_enabled,
        ),
    )
