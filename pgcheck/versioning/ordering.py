"""Dotted-numeric version ordering.

Versions are compared component by component, most significant first, with
the shorter version padded by zeros ("1.2" == "1.2.0"). Parsing is lenient on
purpose: a component that is not a non-negative integer counts as 0 and an
empty string is a single 0 component, so noise picked up by the extractor can
never abort a comparison.
"""

from enum import IntEnum
from itertools import zip_longest
from typing import List


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _component(token: str) -> int:
    try:
        value = int(token)
    except ValueError:
        return 0
    return value if value >= 0 else 0


def parse_components(version: str) -> List[int]:
    """Split a version string into integer components.

    Examples:
        "0.385.2" -> [0, 385, 2]
        "1.x.3"   -> [1, 0, 3]
        ""        -> [0]
    """
    return [_component(part) for part in (version or '').split('.')]


def compare(a: str, b: str) -> Ordering:
    """Compare two versions.

    Returns:
        Ordering.LESS if a < b, Ordering.EQUAL if a == b, Ordering.GREATER if a > b
    """
    for left, right in zip_longest(parse_components(a), parse_components(b), fillvalue=0):
        if left < right:
            return Ordering.LESS
        if left > right:
            return Ordering.GREATER
    return Ordering.EQUAL


def is_update_available(installed: str, latest: str) -> bool:
    """True when ``latest`` is strictly newer than ``installed``."""
    return compare(latest, installed) is Ordering.GREATER
