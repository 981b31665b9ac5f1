"""Exceptions raised by the proxy.

Every failure is local to the request that raised it. Nothing here is
retried by the proxy itself.
"""


class ProxyError(Exception):
    """Base class for proxy failures."""


class InvalidQueryParameter(ProxyError):
    """The client sent a query parameter the route does not accept.

    Raised before any upstream call is made, so a rejected request never
    touches the cache or the upstream quota.
    """

    def __init__(self, param: str, values: list[str] | None = None) -> None:
        self.param = param
        self.values = values or []
        super().__init__(f"Unusable query param: {param}")


class UpstreamTransportError(ProxyError):
    """Network failure or timeout while talking to an upstream API."""


class UpstreamParseError(ProxyError):
    """Upstream returned bytes that do not match the expected envelope."""


class CacheBackendError(ProxyError):
    """The cache store failed for a reason other than a clean miss."""
