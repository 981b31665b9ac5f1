"""Upstream HTTP client protocol."""

from typing import Protocol, runtime_checkable

from luchadeer.entities import UpstreamResponse


@runtime_checkable
class UpstreamClient(Protocol):
    """Protocol for outbound HTTP GET requests."""

    async def get(self, url: str) -> UpstreamResponse:
        """Issue a GET request.

        Args:
            url: Absolute upstream URL

        Returns:
            The upstream status, headers and raw body

        Raises:
            UpstreamTransportError: On network failure or timeout
        """
        ...
