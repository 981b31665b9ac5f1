"""YouTube video search adapter.

Serves the unarchived-videos listing for one fixed channel. YouTube
responses carry no status envelope worth inspecting, so every body is
cached for the route TTL.
"""

from urllib.parse import urlsplit

from luchadeer.config import settings
from luchadeer.entities import NormalizedRequest, RouteConfig, UpstreamResponse

from .query import add_params, clean_path, encode_query, parse_query, rewrite_prefix, strip_params, validate_params

YOUTUBE_PUBLIC_PATH = "/api/1/youtube/unarchived_videos"

CONTROLLED_PARAMS = ("part", "maxResults", "type", "channelId", "key", "order")

MAX_RESULTS = "50"


class YouTubeAdapter:
    """YouTube implementation of the ProviderAdapter protocol."""

    namespace = "youtube"

    def __init__(
        self,
        route_config: RouteConfig,
        api_key: str | None = None,
        channel_id: str | None = None,
        host: str | None = None,
        search_path: str | None = None,
        scheme: str | None = None,
    ) -> None:
        self._config = route_config
        self._api_key = api_key if api_key is not None else settings.youtube_api_key
        self._channel_id = channel_id if channel_id is not None else settings.youtube_unarchived_channel_id
        self._host = host or settings.youtube_api_host
        self._search_path = search_path or settings.youtube_search_path
        self._scheme = scheme or settings.upstream_scheme

    @property
    def route_config(self) -> RouteConfig:
        return self._config

    def normalize(self, url: str) -> NormalizedRequest:
        parts = urlsplit(url)
        params = parse_query(parts.query)

        strip_params(params, CONTROLLED_PARAMS)
        validate_params(params, self._config)
        add_params(
            params,
            [
                ("part", "snippet"),
                ("maxResults", MAX_RESULTS),
                ("type", "video"),
                ("channelId", self._channel_id),
                ("key", self._api_key),
            ],
        )

        # Without a search term, list the channel newest first.
        if not params.get("q", [""])[0]:
            params.pop("q", None)
            add_params(params, [("order", "date")])

        return NormalizedRequest(
            scheme=self._scheme,
            host=self._host,
            path=rewrite_prefix(clean_path(parts.path), YOUTUBE_PUBLIC_PATH, self._search_path),
            query=encode_query(params),
        )

    def derive_key(self, request: NormalizedRequest) -> str:
        return f"{self.namespace}/{request.request_uri}"

    def process_response(self, response: UpstreamResponse) -> tuple[bytes, int]:
        return response.body, self._config.ttl
