"""
Natural, case-insensitive ordering for human-readable message lists.
"""

import re
from typing import Iterable

_DIGITS_PATTERN = re.compile(r"(\d+)")


def natural_sort_key(value: str) -> list[tuple[int, int | str]]:
    """
    Build a sort key so that "item2" sorts before "item10" and case is ignored.

    Args:
        value: String to build the key for

    Returns:
        List of comparable (kind, part) tuples
    """
    key = []
    for part in _DIGITS_PATTERN.split(str(value)):
        if not part:
            continue
        if part.isdigit():
            key.append((0, int(part)))
        else:
            key.append((1, part.casefold()))
    return key


def natural_sorted(values: Iterable[str]) -> list[str]:
    """Return values sorted naturally and case-insensitively."""
    return sorted(values, key=natural_sort_key)
