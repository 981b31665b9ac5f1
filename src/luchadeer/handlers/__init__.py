"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Provider adapter / Repository
    (HTTP)  -> (Policy) -> (Upstream, Cache, Store)
"""

from .preference_handler import PreferenceHandler
from .proxy_handler import ProxyHandler

__all__ = [
    "PreferenceHandler",
    "ProxyHandler",
]
