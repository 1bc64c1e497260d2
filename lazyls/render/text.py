"""Text measurement and name sanitizing for rendered fields.

Widths are terminal display columns so alignment survives wide characters.
"""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two. Control characters, tab included, count as one
    column because a field's start column is unknown until layout.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Total display columns used by ``text``."""
    return sum(char_display_width(ch) for ch in text)


def quote_nonprintable(text: str) -> str:
    """Replace every non-printable character with ``?``.

    Undecodable filename bytes arrive as lone surrogates and count as
    non-printable too.
    """
    if text.isprintable():
        return text
    return "".join(ch if ch.isprintable() else "?" for ch in text)


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces to ``width`` display columns."""
    missing = width - display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


__all__ = [
    "char_display_width",
    "display_width",
    "quote_nonprintable",
    "pad_to_width",
]
