"""Entry ordering by a selectable key and direction.

``compare`` is the only ordering function; key and direction are passed
explicitly on every call.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from enum import IntEnum
from functools import cmp_to_key

from .entry_model.types import Entry
from .options import Direction, SortKey


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _sign(value: int) -> Ordering:
    if value < 0:
        return Ordering.LESS
    if value > 0:
        return Ordering.GREATER
    return Ordering.EQUAL


def _casefold_bytes(name: str) -> bytes:
    """ASCII-only case folding of the encoded name, as ``strcasecmp`` does."""
    return os.fsencode(name).lower()


def _numeric_value(entry: Entry, key: SortKey) -> int:
    metadata = entry.metadata
    if key is SortKey.SIZE:
        return metadata.size
    if key is SortKey.ACCESS_TIME:
        return int(metadata.access_time)
    if key is SortKey.MODIFY_TIME:
        return int(metadata.modify_time)
    if key is SortKey.CHANGE_TIME:
        return int(metadata.change_time)
    raise ValueError(f"unknown sort key {key!r}")


def compare(a: Entry, b: Entry, key: SortKey, direction: Direction = Direction.ASCENDING) -> Ordering:
    """Order ``a`` relative to ``b``.

    Names compare case-insensitively byte by byte. Numeric keys put the
    larger value first, so sizes list biggest first and times newest first.
    ``Direction.DESCENDING`` negates the result.
    """
    if key is SortKey.LEXICOGRAPHIC:
        left, right = _casefold_bytes(a.name), _casefold_bytes(b.name)
        result = _sign((left > right) - (left < right))
    else:
        left_value, right_value = _numeric_value(a, key), _numeric_value(b, key)
        result = _sign((right_value > left_value) - (right_value < left_value))
    if direction is Direction.DESCENDING:
        return Ordering(-result)
    return result


def sort_entries(entries: Iterable[Entry], key: SortKey, direction: Direction = Direction.ASCENDING) -> list[Entry]:
    """Stable sort of ``entries`` with ``compare`` as the only ordering."""
    return sorted(entries, key=cmp_to_key(lambda a, b: compare(a, b, key, direction)))


def sort_for_listing(entries: Iterable[Entry], key: SortKey, direction: Direction) -> list[Entry]:
    """Sort by name, then by ``key`` when it is not the name.

    The second sort is stable, so entries with equal keys stay in name order.
    """
    ordered = sort_entries(entries, SortKey.LEXICOGRAPHIC, direction)
    if key is not SortKey.LEXICOGRAPHIC:
        ordered = sort_entries(ordered, key, direction)
    return ordered


def sort_operands(entries: Iterable[Entry]) -> tuple[list[Entry], list[Entry]]:
    """Split operands into ``(non_directories, directories)``, each name-sorted ascending."""
    files: list[Entry] = []
    directories: list[Entry] = []
    for entry in entries:
        (directories if entry.metadata.is_dir else files).append(entry)
    return (
        sort_entries(files, SortKey.LEXICOGRAPHIC),
        sort_entries(directories, SortKey.LEXICOGRAPHIC),
    )


__all__ = [
    "Ordering",
    "compare",
    "sort_entries",
    "sort_for_listing",
    "sort_operands",
]
