"""Grid shape selection for rendered records.

Each record is a fixed-size group of sub-fields. A grid column is as wide as
its widest record per sub-field, and every sub-field except the last one on
a line is followed by a one-space separator. Policies differ only in how
they walk candidate shapes and which slot a record lands in; the width
aggregation and fit test are shared.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from ..render.record import RenderedRecord
from ..render.text import display_width

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 1


@dataclass(frozen=True)
class ColumnWidthProfile:
    """Display width of each sub-field of a record, or per-column maxima."""

    widths: tuple[int, ...]

    @classmethod
    def of_record(cls, record: RenderedRecord) -> "ColumnWidthProfile":
        return cls(tuple(display_width(field) for field in record.fields))

    @classmethod
    def blank(cls, field_count: int, minimum: int = 1) -> "ColumnWidthProfile":
        return cls((minimum,) * field_count)

    def merge(self, other: "ColumnWidthProfile") -> "ColumnWidthProfile":
        """Per-field maximum of two profiles."""
        if len(other.widths) != len(self.widths):
            raise ValueError("entry has more columns than other entries")
        return ColumnWidthProfile(tuple(max(a, b) for a, b in zip(self.widths, other.widths)))

    @property
    def total(self) -> int:
        return sum(self.widths)

    def __len__(self) -> int:
        return len(self.widths)


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    column_widths: tuple[ColumnWidthProfile, ...]

    @property
    def total_width(self) -> int:
        return grid_width(self.column_widths)


def grid_width(column_widths: Sequence[ColumnWidthProfile]) -> int:
    """Printed width of a line that fills every column."""
    if not column_widths:
        return 0
    field_count = len(column_widths[0])
    separators = len(column_widths) * field_count - 1
    return sum(profile.total for profile in column_widths) + separators * SEPARATOR_WIDTH


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


class LayoutPolicy(ABC):
    """Strategy for filling a width-bounded grid with ``n`` records."""

    @abstractmethod
    def first_shape(self, count: int) -> tuple[int, int]:
        """Initial ``(rows, cols)`` candidate."""

    @abstractmethod
    def next_shape(self, rows: int, cols: int, count: int) -> tuple[int, int]:
        """Next ``(rows, cols)`` candidate after ``(rows, cols)`` did not fit."""

    @abstractmethod
    def is_last_shape(self, rows: int, cols: int, count: int) -> bool:
        """Whether ``(rows, cols)`` is accepted regardless of width."""

    @abstractmethod
    def index_at(self, row: int, col: int, rows: int, cols: int) -> int:
        """Record index shown at grid slot ``(row, col)``; may be ``>= count``."""

    @abstractmethod
    def column_of(self, index: int, rows: int, cols: int) -> int:
        """Grid column holding record ``index``."""

    def column_widths(
        self,
        profiles: Sequence[ColumnWidthProfile],
        rows: int,
        cols: int,
    ) -> tuple[ColumnWidthProfile, ...]:
        """Per-column, per-sub-field maxima for the shape ``(rows, cols)``."""
        field_count = len(profiles[0])
        widths = [ColumnWidthProfile.blank(field_count) for _ in range(cols)]
        for index, profile in enumerate(profiles):
            col = self.column_of(index, rows, cols)
            widths[col] = widths[col].merge(profile)
        return tuple(widths)

    def arrange(self, profiles: Sequence[ColumnWidthProfile], width: int) -> Grid:
        """Pick the first candidate shape that fits ``width`` columns."""
        count = len(profiles)
        if count == 0:
            return Grid(rows=0, cols=0, column_widths=())

        rows, cols = self.first_shape(count)
        while True:
            column_widths = self.column_widths(profiles, rows, cols)
            if self.is_last_shape(rows, cols, count) or grid_width(column_widths) <= width:
                break
            rows, cols = self.next_shape(rows, cols, count)

        logger.debug("%s layout of %d records: %d rows x %d cols", type(self).__name__, count, rows, cols)
        return Grid(rows=rows, cols=cols, column_widths=column_widths)


class DownThenAcrossPolicy(LayoutPolicy):
    """Fill columns top to bottom, adding rows until the grid fits (``C``)."""

    def first_shape(self, count: int) -> tuple[int, int]:
        return 1, count

    def next_shape(self, rows: int, cols: int, count: int) -> tuple[int, int]:
        rows += 1
        return rows, _ceil_div(count, rows)

    def is_last_shape(self, rows: int, cols: int, count: int) -> bool:
        return rows >= count

    def index_at(self, row: int, col: int, rows: int, cols: int) -> int:
        return row + col * rows

    def column_of(self, index: int, rows: int, cols: int) -> int:
        return index // rows


class AcrossPolicy(LayoutPolicy):
    """Fill rows left to right, removing columns until the grid fits (``x``)."""

    def first_shape(self, count: int) -> tuple[int, int]:
        return 1, count

    def next_shape(self, rows: int, cols: int, count: int) -> tuple[int, int]:
        cols -= 1
        return _ceil_div(count, cols), cols

    def is_last_shape(self, rows: int, cols: int, count: int) -> bool:
        return cols <= 1

    def index_at(self, row: int, col: int, rows: int, cols: int) -> int:
        return row * cols + col

    def column_of(self, index: int, rows: int, cols: int) -> int:
        return index % cols


class SingleColumnPolicy(LayoutPolicy):
    """One record per line, aligned across all records (``1``, ``l``, ``n``)."""

    def first_shape(self, count: int) -> tuple[int, int]:
        return count, 1

    def next_shape(self, rows: int, cols: int, count: int) -> tuple[int, int]:
        return rows, cols

    def is_last_shape(self, rows: int, cols: int, count: int) -> bool:
        return True

    def index_at(self, row: int, col: int, rows: int, cols: int) -> int:
        return row

    def column_of(self, index: int, rows: int, cols: int) -> int:
        return 0


__all__ = [
    "SEPARATOR_WIDTH",
    "ColumnWidthProfile",
    "Grid",
    "grid_width",
    "LayoutPolicy",
    "DownThenAcrossPolicy",
    "AcrossPolicy",
    "SingleColumnPolicy",
]
