"""Query parameter predicates.

Route policy is data: each route maps parameter names to one of these
predicates. A predicate receives every value the parameter had in the
query string and returns True only if the request may proceed. All of
them reject a parameter that appears more than once.
"""

import re
from collections.abc import Collection

from luchadeer.entities import Predicate

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: str) -> int | None:
    if _INTEGER.fullmatch(value) is None:
        return None
    return int(value)


def single_value(values: list[str]) -> bool:
    """Accept any value, as long as there is exactly one."""
    return len(values) == 1


def page_aligned_offset(page_size: int) -> Predicate:
    """Accept a single integer that is an exact multiple of page_size.

    Keeps pagination on page boundaries so pages share cache entries.
    """

    def check(values: list[str]) -> bool:
        if not single_value(values):
            return False
        offset = _parse_int(values[0])
        return offset is not None and offset % page_size == 0

    return check


def integer_in(allowed: Collection[int]) -> Predicate:
    """Accept a single integer drawn from a fixed set of identifiers."""

    def check(values: list[str]) -> bool:
        if not single_value(values):
            return False
        number = _parse_int(values[0])
        return number is not None and number in allowed

    return check


def exactly(literal: str) -> Predicate:
    """Accept a single value equal to one literal."""

    def check(values: list[str]) -> bool:
        return single_value(values) and values[0] == literal

    return check
