"""Emit aligned text lines for a chosen grid."""

from __future__ import annotations

from collections.abc import Sequence

from ..options import LayoutMode, ListingOptions
from ..render.record import RenderedRecord
from ..render.text import pad_to_width
from .grid import (
    AcrossPolicy,
    ColumnWidthProfile,
    DownThenAcrossPolicy,
    Grid,
    LayoutPolicy,
    SingleColumnPolicy,
)


def policy_for(options: ListingOptions) -> LayoutPolicy:
    if options.layout is LayoutMode.COLUMNS:
        return DownThenAcrossPolicy()
    if options.layout is LayoutMode.ACROSS:
        return AcrossPolicy()
    return SingleColumnPolicy()


def format_cell(record: RenderedRecord, widths: ColumnWidthProfile, line_end: bool) -> str:
    """Pad each sub-field to its column width, each followed by one space.

    The last sub-field of a line is emitted bare.
    """
    parts: list[str] = []
    last = len(record.fields) - 1
    for index, field in enumerate(record.fields):
        if index == last and line_end:
            parts.append(field)
        else:
            parts.append(pad_to_width(field, widths.widths[index]) + " ")
    return "".join(parts)


def format_grid(records: Sequence[RenderedRecord], grid: Grid, policy: LayoutPolicy) -> list[str]:
    """Render ``records`` into lines following ``policy``'s slot order."""
    count = len(records)
    lines: list[str] = []
    for row in range(grid.rows):
        slots: list[tuple[int, int]] = []
        for col in range(grid.cols):
            index = policy.index_at(row, col, grid.rows, grid.cols)
            if index < count:
                slots.append((col, index))
        if not slots:
            continue
        cells = [
            format_cell(records[index], grid.column_widths[col], line_end=(position == len(slots) - 1))
            for position, (col, index) in enumerate(slots)
        ]
        lines.append("".join(cells))
    return lines


def layout_records(records: Sequence[RenderedRecord], width: int, policy: LayoutPolicy) -> list[str]:
    """Choose a grid for ``records`` within ``width`` and render its lines."""
    if not records:
        return []
    profiles = [ColumnWidthProfile.of_record(record) for record in records]
    grid = policy.arrange(profiles, width)
    return format_grid(records, grid, policy)


__all__ = [
    "policy_for",
    "format_cell",
    "format_grid",
    "layout_records",
]
