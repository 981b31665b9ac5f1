"""HTTP handler for proxied routes.

Converts ProxyService results into byte-exact responses and proxy
exceptions into 500s. Error details never include upstream bytes.
"""

from fastapi import HTTPException, Request, Response, status

from luchadeer.entities import CacheStatus
from luchadeer.exceptions import InvalidQueryParameter, UpstreamParseError, UpstreamTransportError
from luchadeer.routes import ProxyRoute
from luchadeer.services import ProxyService


class ProxyHandler:
    """HTTP handler for every proxied route.

    Example:
        ```python
        handler = ProxyHandler(proxy_service=ProxyService.create(store, client))

        @app.get("/api/1/giantbomb/game/{resource:path}")
        async def game(request: Request) -> Response:
            return await handler.proxy(route, request)
        ```
    """

    def __init__(self, proxy_service: ProxyService) -> None:
        """Initialize the proxy handler.

        Args:
            proxy_service: The proxy service for business logic (required).
        """
        self._proxy = proxy_service

    async def proxy(self, route: ProxyRoute, request: Request) -> Response:
        """Handle GET <public-prefix>/<resource> requests.

        Args:
            route: The matched route
            request: The inbound request

        Returns:
            Response carrying the upstream or cached bytes

        Raises:
            HTTPException: 500 if the request is rejected or the upstream fails
        """
        # Percent-encoded as received, so an escaped "/" is still visible.
        raw_path = request.scope.get("raw_path")
        url = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"

        try:
            result = await self._proxy.handle(route, url)
        except InvalidQueryParameter as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Unusable query param: {e.param}",
            ) from e
        except UpstreamTransportError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Upstream request failed",
            ) from e
        except UpstreamParseError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Upstream returned an unreadable response",
            ) from e

        headers = {"X-Cache": result.cache_status.value}
        if result.cache_status is CacheStatus.BYPASS:
            headers["Cache-Control"] = "no-store"

        return Response(content=result.body, media_type="application/json", headers=headers)
