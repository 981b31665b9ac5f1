"""Upstream response entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw response from an upstream API.

    Attributes:
        status_code: HTTP status code
        body: Raw response bytes
        headers: Response headers
    """

    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)
