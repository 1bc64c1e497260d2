"""Field rendering: entry metadata to delimited printable records."""

from __future__ import annotations

from .fields import (
    format_blocks,
    format_human_size,
    format_kilobytes,
    format_size,
    format_time,
    mode_string,
    render_block_total,
    render_entry,
    type_suffix,
)
from .identity import IdentityResolver, NumericIdentityResolver, SystemIdentityResolver
from .record import DELIMITER, LINE_SIZE, LineBuffer, RenderedRecord
from .text import display_width, quote_nonprintable

__all__ = [
    "format_blocks",
    "format_human_size",
    "format_kilobytes",
    "format_size",
    "format_time",
    "mode_string",
    "render_block_total",
    "render_entry",
    "type_suffix",
    "IdentityResolver",
    "NumericIdentityResolver",
    "SystemIdentityResolver",
    "DELIMITER",
    "LINE_SIZE",
    "LineBuffer",
    "RenderedRecord",
    "display_width",
    "quote_nonprintable",
]
