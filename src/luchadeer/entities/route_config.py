"""Route configuration entity."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# A predicate receives every value a parameter had in the query string.
Predicate = Callable[[list[str]], bool]


@dataclass(frozen=True)
class RouteConfig:
    """Validation and TTL policy for one proxied route.

    Attributes:
        allowed_params: Parameter name -> predicate over its raw values
        ttl: Cache TTL in seconds for successful upstream responses
    """

    allowed_params: Mapping[str, Predicate] = field(default_factory=dict)
    ttl: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_params", MappingProxyType(dict(self.allowed_params)))
