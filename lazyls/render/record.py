"""Delimited rendered records and the bounded buffer that builds them."""

from __future__ import annotations

from dataclasses import dataclass

from ..entry_model.types import encoded_length
from ..errors import CapacityError

DELIMITER = "\b"
LINE_SIZE = 512


@dataclass(frozen=True)
class RenderedRecord:
    """Printable fields of one entry, in display order."""

    fields: tuple[str, ...]

    @property
    def text(self) -> str:
        """Fields joined by ``DELIMITER``."""
        return DELIMITER.join(self.fields)

    @classmethod
    def parse(cls, text: str) -> "RenderedRecord":
        """Split delimited ``text`` back into a record."""
        return cls(tuple(text.split(DELIMITER)))

    def __len__(self) -> int:
        return len(self.fields)


class LineBuffer:
    """Accumulate record fields within a fixed byte budget.

    The budget counts field bytes, one byte per delimiter, and one byte
    reserved for the terminator. Anything that would not fit raises
    ``CapacityError`` instead of being truncated.
    """

    def __init__(self, capacity: int = LINE_SIZE) -> None:
        if capacity < 1:
            raise ValueError("line buffer needs room for its terminator")
        self.capacity = capacity
        # Reserve the terminator up front.
        self.remaining = capacity - 1
        self._fields: list[str] = []
        self._current: list[str] = []

    def write(self, text: str, what: str = "field") -> None:
        size = encoded_length(text)
        if size > self.remaining:
            raise CapacityError(f"buffer too small to fit {what}")
        self._current.append(text)
        self.remaining -= size

    def delimit(self) -> None:
        """Close the current field."""
        if self.remaining < 1:
            raise CapacityError("buffer too small to fit delimiter")
        self.remaining -= 1
        self._fields.append("".join(self._current))
        self._current = []

    def finish(self) -> RenderedRecord:
        """Close the last field and return the record."""
        return RenderedRecord((*self._fields, "".join(self._current)))


__all__ = [
    "DELIMITER",
    "LINE_SIZE",
    "RenderedRecord",
    "LineBuffer",
]
