"""Random-table row resolution — map a rolled value to a table row."""

from __future__ import annotations

import re
from collections.abc import Sequence

_RANGE_PATTERN = re.compile(r"^(\d+)\s*[-–]\s*(\d+)$")
_EXACT_PATTERN = re.compile(r"^\d+$")
_DIE_PATTERN = re.compile(r"(?<![A-Za-z])[dD](\d+)")


def row_matches(rolled: int, key: str) -> bool:
    """Whether a single row key ("3", "4-6") covers the rolled value."""
    key = key.strip()
    range_match = _RANGE_PATTERN.match(key)
    if range_match:
        low, high = int(range_match.group(1)), int(range_match.group(2))
        return low <= rolled <= high
    if _EXACT_PATTERN.match(key):
        return int(key) == rolled
    return False


def resolve_row(rolled: int, row_keys: Sequence[str]) -> int | None:
    """Return the index of the row whose key covers ``rolled``.

    When several rows match, the last one in table order wins.
    Returns None when no row matches.
    """
    matched = None
    for index, key in enumerate(row_keys):
        if row_matches(rolled, key):
            matched = index
    return matched


def find_die_size(header_row: str) -> int | None:
    """Die size named in a table header row, e.g. ``| d20 | Encounter |`` -> 20."""
    match = _DIE_PATTERN.search(header_row)
    return int(match.group(1)) if match else None
