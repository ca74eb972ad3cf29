"""
Ordering of dotted license version strings.
"""

from __future__ import annotations

import logging
from itertools import zip_longest

logger = logging.getLogger(__name__)


class InvalidVersionError(ValueError):
    """Raised when a version string has non-numeric components."""


def parse_version(version: str) -> tuple[int, ...]:
    """Split a dotted version string into its numeric components."""
    parts = version.split(".")
    if not all(part.isascii() and part.isdigit() for part in parts):
        msg = f"Version {version!r} is not a dotted numeric version"
        raise InvalidVersionError(msg)
    return tuple(int(part) for part in parts)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 as left is lower than, equal to or greater than right.

    Components are compared numerically, with missing trailing components
    counted as zero. Versions that do not parse are compared as plain strings,
    which is what the legacy generator did for every version.
    """
    try:
        left_parts = parse_version(left)
        right_parts = parse_version(right)
    except InvalidVersionError:
        logger.warning(
            "Comparing non-numeric versions %r and %r as strings", left, right
        )
        return (left > right) - (left < right)

    for a, b in zip_longest(left_parts, right_parts, fillvalue=0):
        if a != b:
            return -1 if a < b else 1
    return 0


def version_lt(left: str, right: str) -> bool:
    return compare_versions(left, right) < 0


def version_le(left: str, right: str) -> bool:
    return compare_versions(left, right) <= 0
