"""Data Transfer Objects for external contracts.

These Pydantic models describe payloads crossing the process boundary:
the client-facing preference request, the Giant Bomb status envelope
read from upstream bodies, and the fixed envelope served for disabled
routes.

Internal logic should use entities from the entities package.
"""

from .requests import PreferenceRequest
from .responses import DISABLED_STATUS_CODE, DisabledEnvelope, HealthCheckResponse
from .upstream import GiantBombEnvelope, GiantBombStatus

__all__ = [
    "DISABLED_STATUS_CODE",
    "DisabledEnvelope",
    "GiantBombEnvelope",
    "GiantBombStatus",
    "HealthCheckResponse",
    "PreferenceRequest",
]
