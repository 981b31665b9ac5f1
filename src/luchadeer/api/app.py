from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from luchadeer.api.dependencies import PreferenceHandlerDep, ProxyHandlerDep, ProxyServiceDep, lifespan
from luchadeer.config import Settings, settings
from luchadeer.dto import HealthCheckResponse
from luchadeer.protocols import CacheStore, PreferenceStore, UpstreamClient
from luchadeer.routes import ProxyRoute, build_routes

PREFERENCES_PATH = "/api/1/preferences"


def _proxy_endpoint(route: ProxyRoute):
    async def endpoint(request: Request, handler: ProxyHandlerDep) -> Response:
        return await handler.proxy(route, request)

    endpoint.__name__ = f"proxy_{route.name}"
    return endpoint


def create_app(
    app_settings: Settings | None = None,
    *,
    cache_store: CacheStore | None = None,
    upstream_client: UpstreamClient | None = None,
    preference_store: PreferenceStore | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Collaborators left as None are created in the lifespan from settings.

    Args:
        app_settings: Settings to build the route table from. Defaults to settings.
        cache_store: Cache backend override.
        upstream_client: Upstream HTTP client override.
        preference_store: Preference store override.

    Returns:
        The configured application
    """
    app_settings = app_settings or settings
    routes = build_routes(app_settings)

    app = FastAPI(
        title="Luchadeer Proxy",
        description="Caching proxy for the Giant Bomb and YouTube read APIs",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.routes = routes
    app.state.collaborators = {
        name: value
        for name, value in (
            ("cache_store", cache_store),
            ("upstream_client", upstream_client),
            ("preference_store", preference_store),
        )
        if value is not None
    }

    for route in routes:
        path = f"{route.public_path}{{resource:path}}" if route.subtree else route.public_path
        app.add_api_route(path, _proxy_endpoint(route), methods=["GET"])

    @app.post(PREFERENCES_PATH)
    async def update_preferences(request: Request, handler: PreferenceHandlerDep) -> dict[str, Any]:
        """Create or replace a device's notification preferences."""
        return await handler.update_preferences(request)

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(service: ProxyServiceDep) -> HealthCheckResponse:
        """Health check endpoint."""
        if not await service.is_healthy():
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Cache backend unreachable",
            )
        return HealthCheckResponse(status="healthy", cache_healthy=True)

    @app.get("/", response_model=None)
    async def root() -> RedirectResponse | dict[str, Any]:
        """Send browsers to the client download page."""
        if app_settings.client_download_url:
            return RedirectResponse(app_settings.client_download_url, status_code=status.HTTP_303_SEE_OTHER)
        return {
            "name": "Luchadeer Proxy",
            "version": "0.1.0",
            "endpoints": {
                "proxy": [route.public_path for route in routes],
                "preferences": PREFERENCES_PATH,
                "health": "/health",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "luchadeer.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
