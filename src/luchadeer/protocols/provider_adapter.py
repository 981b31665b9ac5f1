"""Upstream provider adapter protocol.

Each upstream API gets one adapter that knows how to rewrite requests
for it, how to key its responses, and how long to keep them.

Implementations:
- GiantBombAdapter (media catalog, JSON status envelope)
- YouTubeAdapter (video search, no status envelope)
"""

from typing import Protocol, runtime_checkable

from luchadeer.entities import NormalizedRequest, UpstreamResponse


@runtime_checkable
class ProviderAdapter(Protocol):
    """Protocol for per-provider request and response policy."""

    @property
    def namespace(self) -> str:
        """Cache key namespace for this provider (e.g. "giantbomb")."""
        ...

    def normalize(self, url: str) -> NormalizedRequest:
        """Rewrite and validate an inbound URL into the upstream request.

        Args:
            url: The inbound request URL (absolute, or path plus query)

        Returns:
            The normalized upstream request

        Raises:
            InvalidQueryParameter: If any remaining parameter is not allowed
        """
        ...

    def derive_key(self, request: NormalizedRequest) -> str:
        """Derive the cache key for a normalized request.

        Must be pure: the same request always yields the same key.
        """
        ...

    def process_response(self, response: UpstreamResponse) -> tuple[bytes, int]:
        """Decide what to cache and for how long.

        Args:
            response: The raw upstream response

        Returns:
            Tuple of (body, ttl) where body is the unmodified upstream bytes

        Raises:
            UpstreamParseError: If the body is not the expected envelope
        """
        ...
