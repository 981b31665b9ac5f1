"""httpx implementation of UpstreamClient.

One pooled ``httpx.AsyncClient`` is shared by every request. Failures
are reported once and never retried here.
"""

import httpx

from luchadeer.config import settings
from luchadeer.entities import UpstreamResponse
from luchadeer.exceptions import UpstreamTransportError


class HttpxUpstreamClient:
    """httpx-based implementation of the UpstreamClient protocol.

    Example:
        ```python
        client = HttpxUpstreamClient.create(timeout=5.0)
        response = await client.get("https://www.giantbomb.com/api/video_types/?format=json")
        response.status_code  # 200
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the upstream client.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.
            transport: Custom httpx transport (tests use httpx.MockTransport).
        """
        self._timeout = timeout or settings.upstream_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
                headers={"User-Agent": "luchadeer-proxy"},
            )
        return self._client

    @classmethod
    def create(cls, timeout: float | None = None) -> "HttpxUpstreamClient":
        """Factory method to create HttpxUpstreamClient with defaults.

        Args:
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpxUpstreamClient
        """
        return cls(timeout=timeout)

    async def get(self, url: str) -> UpstreamResponse:
        """Issue a GET request to an upstream API.

        Raises:
            UpstreamTransportError: On connection failure, timeout or protocol error
        """
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            # The query string carries API keys; keep it out of error messages.
            endpoint = url.split("?", 1)[0]
            raise UpstreamTransportError(f"GET {endpoint} failed: {e!r}") from e

        return UpstreamResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
