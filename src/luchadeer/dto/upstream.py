"""Upstream payload envelopes.

Only read to decide a TTL. The bytes that get cached and served are
always the original upstream body, never a re-serialized model.
"""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, StrictInt


class GiantBombStatus(IntEnum):
    """Giant Bomb ``status_code`` values the proxy treats as success."""

    OK = 1
    RESTRICTED_CONTENT = 105


class GiantBombEnvelope(BaseModel):
    """Status fields shared by every Giant Bomb API response."""

    model_config = ConfigDict(extra="ignore")

    # Strict: "1" or true is a malformed envelope, not success.
    status_code: StrictInt | None = None
    error: str | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status_code in (GiantBombStatus.OK, GiantBombStatus.RESTRICTED_CONTENT)
