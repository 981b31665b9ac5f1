"""Normalized outbound request entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizedRequest:
    """The outbound request produced from an inbound proxy request.

    Attributes:
        scheme: Upstream URL scheme (e.g. "https")
        host: Fixed upstream host
        path: Rewritten upstream path
        query: Deterministically encoded query string (sorted by name)
    """

    scheme: str
    host: str
    path: str
    query: str

    @property
    def request_uri(self) -> str:
        """Path plus query string, the way it appears on the request line."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @property
    def url(self) -> str:
        """Absolute URL for the upstream fetch."""
        return f"{self.scheme}://{self.host}{self.request_uri}"
