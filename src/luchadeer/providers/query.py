"""Query string and path helpers shared by the provider adapters."""

from collections.abc import Iterable
from urllib.parse import parse_qsl, quote, unquote, urlencode

from luchadeer.entities import RouteConfig
from luchadeer.exceptions import InvalidQueryParameter

QueryParams = dict[str, list[str]]

# Percent-escapes are decoded byte for byte so values that are not valid
# UTF-8 reach upstream unchanged.
QUERY_ENCODING = "latin-1"

# Characters RFC 3986 allows unescaped inside a path segment, besides the
# ones quote() never escapes.
PATH_SAFE = ":@!$&'()*+,;="


def parse_query(query: str) -> QueryParams:
    """Parse a raw query string into name -> values, keeping blank values."""
    params: QueryParams = {}
    for name, value in parse_qsl(query, keep_blank_values=True, encoding=QUERY_ENCODING):
        params.setdefault(name, []).append(value)
    return params


def strip_params(params: QueryParams, names: Iterable[str]) -> None:
    """Drop parameters the proxy controls, whatever the client sent for them."""
    for name in names:
        params.pop(name, None)


def validate_params(params: QueryParams, route_config: RouteConfig) -> None:
    """Check every remaining parameter against the route's predicates.

    Raises:
        InvalidQueryParameter: On the first parameter that is not allowed
            or whose predicate rejects its values
    """
    for name, values in params.items():
        check = route_config.allowed_params.get(name)
        if check is None or not check(values):
            raise InvalidQueryParameter(name, values)


def add_params(params: QueryParams, fixed: Iterable[tuple[str, str]]) -> None:
    for name, value in fixed:
        params.setdefault(name, []).append(value)


def encode_query(params: QueryParams) -> str:
    """Encode parameters sorted by name so equal requests encode identically."""
    return urlencode(
        [(name, value) for name in sorted(params) for value in params[name]],
        encoding=QUERY_ENCODING,
    )


def rewrite_prefix(path: str, public_prefix: str, upstream_prefix: str) -> str:
    """Swap the public route prefix for the upstream one."""
    if path.startswith(public_prefix):
        return upstream_prefix + path[len(public_prefix):]
    return path


def clean_path(path: str) -> str:
    """Re-encode a request path one segment at a time.

    Every segment is decoded and quoted again, so equivalent spellings of
    the same path share one cache key and nothing reaches upstream raw.

    Raises:
        InvalidQueryParameter: If a segment decodes to "." or "..", or
            hides a "/" behind %2F
    """
    segments = []
    for segment in path.split("/"):
        decoded = unquote(segment, encoding=QUERY_ENCODING)
        if decoded in (".", "..") or "/" in decoded:
            raise InvalidQueryParameter("path", [path])
        segments.append(quote(decoded, safe=PATH_SAFE, encoding=QUERY_ENCODING))
    return "/".join(segments)
