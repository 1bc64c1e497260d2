"""Listing configuration: flag state plus externally supplied signals.

``ListingOptions`` is frozen and read-only for the whole listing run.
Flag-group exclusivity is resolved by the CLI parser before construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortKey(Enum):
    LEXICOGRAPHIC = "name"
    SIZE = "size"
    ACCESS_TIME = "atime"
    MODIFY_TIME = "mtime"
    CHANGE_TIME = "ctime"


class Direction(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class LayoutMode(Enum):
    """Mutually exclusive output layouts (``C``, ``l``, ``n``, ``x``, ``1``)."""

    COLUMNS = "C"
    LONG = "l"
    NUMERIC_LONG = "n"
    ACROSS = "x"
    SINGLE = "1"


class QuoteMode(Enum):
    """Non-printable handling: ``q`` substitutes ``?``, ``w`` prints raw."""

    QUOTE = "q"
    RAW = "w"


class TimeField(Enum):
    MODIFY = "mtime"
    ACCESS = "atime"
    CHANGE = "ctime"


@dataclass(frozen=True)
class ListingOptions:
    """One listing run's configuration.

    Boolean fields mirror single-character flags. ``block_size``,
    ``terminal_width`` and ``output_is_terminal`` come from the environment
    and the output stream rather than from flags.
    """

    show_all: bool = False
    show_almost_all: bool = False
    change_time: bool = False
    directory_only: bool = False
    type_suffix: bool = False
    no_sort: bool = False
    human_size: bool = False
    inode: bool = False
    kilobyte_size: bool = False
    recursive: bool = False
    reverse: bool = False
    sort_by_size: bool = False
    block_count: bool = False
    sort_by_time: bool = False
    access_time: bool = False
    layout: LayoutMode = LayoutMode.SINGLE
    quoting: QuoteMode = QuoteMode.RAW
    block_size: int = 512
    terminal_width: int = 80
    output_is_terminal: bool = False

    @property
    def long_format(self) -> bool:
        return self.layout in (LayoutMode.LONG, LayoutMode.NUMERIC_LONG)

    @property
    def numeric_ids(self) -> bool:
        return self.layout is LayoutMode.NUMERIC_LONG

    @property
    def quote_nonprintable(self) -> bool:
        return self.quoting is QuoteMode.QUOTE

    @property
    def time_field(self) -> TimeField:
        """Timestamp shown and sorted on: ``c`` wins over ``u``, modify by default."""
        if self.change_time:
            return TimeField.CHANGE
        if self.access_time:
            return TimeField.ACCESS
        return TimeField.MODIFY

    @property
    def sort_key(self) -> SortKey:
        if self.sort_by_time:
            return {
                TimeField.CHANGE: SortKey.CHANGE_TIME,
                TimeField.ACCESS: SortKey.ACCESS_TIME,
                TimeField.MODIFY: SortKey.MODIFY_TIME,
            }[self.time_field]
        if self.sort_by_size:
            return SortKey.SIZE
        return SortKey.LEXICOGRAPHIC

    @property
    def direction(self) -> Direction:
        return Direction.DESCENDING if self.reverse else Direction.ASCENDING

    @property
    def prints_block_total(self) -> bool:
        """Whether a ``total`` line precedes each directory's entries."""
        return self.long_format or (self.block_count and self.output_is_terminal)


__all__ = [
    "SortKey",
    "Direction",
    "LayoutMode",
    "QuoteMode",
    "TimeField",
    "ListingOptions",
]
