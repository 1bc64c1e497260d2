"""Columnar layout of rendered records into a width-bounded grid."""

from __future__ import annotations

from .grid import (
    AcrossPolicy,
    ColumnWidthProfile,
    DownThenAcrossPolicy,
    Grid,
    LayoutPolicy,
    SingleColumnPolicy,
    grid_width,
)
from .printer import format_cell, format_grid, layout_records, policy_for

__all__ = [
    "AcrossPolicy",
    "ColumnWidthProfile",
    "DownThenAcrossPolicy",
    "Grid",
    "LayoutPolicy",
    "SingleColumnPolicy",
    "grid_width",
    "format_cell",
    "format_grid",
    "layout_records",
    "policy_for",
]
