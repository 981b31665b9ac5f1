"""Giant Bomb media catalog adapter.

Giant Bomb wraps every payload in a status envelope:

    {"status_code": 1, "error": "OK", "results": [...], ...}

Only status codes 1 (OK) and 105 (restricted content) count as success.
Any other status is still cached, but only for the bad-request TTL, so a
flapping upstream cannot trigger a refetch storm and cannot poison the
cache for long.
"""

from urllib.parse import urlsplit

import structlog
from pydantic import ValidationError

from luchadeer.config import settings
from luchadeer.dto import GiantBombEnvelope
from luchadeer.entities import NormalizedRequest, RouteConfig, UpstreamResponse
from luchadeer.exceptions import UpstreamParseError

from .query import add_params, clean_path, encode_query, parse_query, rewrite_prefix, strip_params, validate_params

log = structlog.get_logger(__name__)

GIANTBOMB_PUBLIC_PREFIX = "/api/1/giantbomb"

# Parameters the proxy sets itself. Client values are discarded.
CONTROLLED_PARAMS = ("api_key", "format", "limit")


class GiantBombAdapter:
    """Giant Bomb implementation of the ProviderAdapter protocol.

    Example:
        ```python
        adapter = GiantBombAdapter(RouteConfig(ttl=86400))
        request = adapter.normalize("/api/1/giantbomb/game/3030-4725/")
        request.url  # https://www.giantbomb.com/api/game/3030-4725/?api_key=...&format=json
        ```
    """

    namespace = "giantbomb"

    def __init__(
        self,
        route_config: RouteConfig,
        api_key: str | None = None,
        host: str | None = None,
        api_path: str | None = None,
        scheme: str | None = None,
        bad_request_ttl: int | None = None,
    ) -> None:
        """Initialize the adapter for one route.

        Args:
            route_config: Allowed parameters and success TTL for the route.
            api_key: Key injected into every upstream request. Defaults to settings.
            host: Upstream host. Defaults to settings.
            api_path: Upstream path prefix replacing the public prefix. Defaults to settings.
            scheme: Upstream URL scheme. Defaults to settings.
            bad_request_ttl: TTL for non-success envelopes. Defaults to settings.
        """
        self._config = route_config
        self._api_key = api_key if api_key is not None else settings.giantbomb_proxy_api_key
        self._host = host or settings.giantbomb_host
        self._api_path = api_path if api_path is not None else settings.giantbomb_api_path
        self._scheme = scheme or settings.upstream_scheme
        self._bad_request_ttl = bad_request_ttl or settings.bad_request_cache_ttl

    @property
    def route_config(self) -> RouteConfig:
        return self._config

    def normalize(self, url: str) -> NormalizedRequest:
        parts = urlsplit(url)
        params = parse_query(parts.query)

        strip_params(params, CONTROLLED_PARAMS)
        validate_params(params, self._config)
        add_params(params, [("api_key", self._api_key), ("format", "json")])

        return NormalizedRequest(
            scheme=self._scheme,
            host=self._host,
            path=rewrite_prefix(clean_path(parts.path), GIANTBOMB_PUBLIC_PREFIX, self._api_path),
            query=encode_query(params),
        )

    def derive_key(self, request: NormalizedRequest) -> str:
        return f"{self.namespace}/{request.request_uri}"

    def process_response(self, response: UpstreamResponse) -> tuple[bytes, int]:
        # The envelope has to be parsed to know whether Giant Bomb said OK.
        try:
            envelope = GiantBombEnvelope.model_validate_json(response.body)
        except ValidationError as e:
            log.error(
                "upstream.parse.failed",
                provider=self.namespace,
                http_status=response.status_code,
                error=str(e),
            )
            raise UpstreamParseError(f"Unparseable {self.namespace} response") from e

        if envelope.is_success:
            return response.body, self._config.ttl

        log.info(
            "upstream.bad_status",
            provider=self.namespace,
            status_code=envelope.status_code,
            message=envelope.message,
            error=envelope.error,
        )
        return response.body, self._bad_request_ttl
