# SPDX-License-Identifier: MIT
"""Version comparison for package archives.

Versions are compared as dot-separated integer components, padding the
shorter one with zeros. This is not semantic versioning: a component that
is not a plain integer (``0-beta``, ``rc1``) counts as 0, so ``1.0-beta``
and ``1.0`` compare equal.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import IntEnum
from functools import cmp_to_key
from itertools import zip_longest
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .index import ArchiveEntry

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


class Ordering(IntEnum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _component_value(part: str) -> int:
    if not _INTEGER_PATTERN.match(part):
        return 0
    try:
        return int(part)
    except ValueError:
        # Longer than the interpreter's int conversion limit
        return 0


def version_components(version: str) -> list[int]:
    """Split a version into integer components.

    Examples:
        >>> version_components("1.2.3")
        [1, 2, 3]
        >>> version_components("1.0-beta")
        [1, 0]
    """
    return [_component_value(part) for part in version.split(".")]


def compare_versions(version1: str, version2: str) -> Ordering:
    """Compare two version strings component by component.

    Args:
        version1: First version
        version2: Second version

    Returns:
        Ordering.GREATER if version1 is newer, Ordering.LESS if it is older,
        Ordering.EQUAL if all padded components match

    Examples:
        >>> compare_versions("2.0.0", "1.9.9")
        <Ordering.GREATER: 1>
        >>> compare_versions("1.2", "1.2.0")
        <Ordering.EQUAL: 0>
    """
    parts1 = version_components(version1)
    parts2 = version_components(version2)

    for num1, num2 in zip_longest(parts1, parts2, fillvalue=0):
        if num1 != num2:
            return Ordering.GREATER if num1 > num2 else Ordering.LESS

    return Ordering.EQUAL


version_sort_key: Callable[[str], Any] = cmp_to_key(compare_versions)


def sort_newest_first(entries: Iterable[ArchiveEntry]) -> list[ArchiveEntry]:
    """Sort archive entries by version, newest first.

    The sort is stable, so entries with equal versions keep their input order.
    """
    return sorted(entries, key=lambda entry: version_sort_key(entry.version), reverse=True)
