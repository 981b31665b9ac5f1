"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Collaborators built once in the lifespan (or injected by tests)
    - Services and handlers stored in app.state
    - Dependency functions retrieve from request.app.state
"""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request

from luchadeer.config import Settings
from luchadeer.handlers import PreferenceHandler, ProxyHandler
from luchadeer.logging_config import configure_logging
from luchadeer.protocols import CacheStore, PreferenceStore, UpstreamClient
from luchadeer.repositories import HttpxUpstreamClient, MemoryCacheStore, RedisCacheStore, RedisPreferenceStore
from luchadeer.services import PreferenceService, ProxyService

log = structlog.get_logger(__name__)


def get_proxy_handler(request: Request) -> ProxyHandler:
    """Dependency injection for ProxyHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "proxy_handler", None)
    if handler is None:
        raise RuntimeError("ProxyHandler not initialized. Check lifespan setup.")
    return handler


def get_preference_handler(request: Request) -> PreferenceHandler:
    """Dependency injection for PreferenceHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "preference_handler", None)
    if handler is None:
        raise RuntimeError("PreferenceHandler not initialized. Check lifespan setup.")
    return handler


def get_proxy_service(request: Request) -> ProxyService:
    service = getattr(request.app.state, "proxy_service", None)
    if service is None:
        raise RuntimeError("ProxyService not initialized. Check lifespan setup.")
    return service


def _default_cache_store(app_settings: Settings) -> CacheStore:
    if app_settings.cache_backend == "memory":
        return MemoryCacheStore()
    return RedisCacheStore.create()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Repositories (cache store, upstream client, preference store),
       unless create_app() was given them already
    2. Services - app.state.proxy_service, app.state.preference_service
    3. Handlers - app.state.proxy_handler, app.state.preference_handler

    Cleanup:
        Closes clients this lifespan created and clears app.state
    """
    app_settings: Settings = app.state.settings
    configure_logging(json_logs=app_settings.log_json, log_level=app_settings.log_level)

    injected = app.state.collaborators
    cache_store: CacheStore | None = injected.get("cache_store")
    if cache_store is None:
        cache_store = _default_cache_store(app_settings)

    upstream_client: UpstreamClient | None = injected.get("upstream_client")
    if upstream_client is None:
        upstream_client = HttpxUpstreamClient.create(timeout=app_settings.upstream_timeout)

    preference_store: PreferenceStore | None = injected.get("preference_store")
    if preference_store is None:
        preference_store = RedisPreferenceStore.create()

    proxy_service = ProxyService.create(cache_store=cache_store, upstream_client=upstream_client)
    preference_service = PreferenceService(store=preference_store)

    app.state.proxy_service = proxy_service
    app.state.preference_service = preference_service
    app.state.proxy_handler = ProxyHandler(proxy_service=proxy_service)
    app.state.preference_handler = PreferenceHandler(preference_service=preference_service)

    log.info(
        "startup",
        cache_backend=type(cache_store).__name__,
        cache_healthy=await proxy_service.is_healthy(),
        routes=[route.name for route in app.state.routes if route.enabled],
        disabled_routes=[route.name for route in app.state.routes if not route.enabled],
    )

    yield

    # Only close what was created here; injected collaborators belong to the caller.
    for name, collaborator in (
        ("upstream_client", upstream_client),
        ("cache_store", cache_store),
        ("preference_store", preference_store),
    ):
        close = getattr(collaborator, "close", None)
        if name not in injected and close is not None:
            await close()

    del app.state.proxy_handler
    del app.state.preference_handler
    del app.state.proxy_service
    del app.state.preference_service
    log.info("shutdown")


# Type aliases for cleaner dependency injection
ProxyHandlerDep = Annotated[ProxyHandler, Depends(get_proxy_handler)]
PreferenceHandlerDep = Annotated[PreferenceHandler, Depends(get_preference_handler)]
ProxyServiceDep = Annotated[ProxyService, Depends(get_proxy_service)]
