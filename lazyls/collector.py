"""Snapshot one directory into visible entries.

The directory is enumerated twice: once to count, once to collect. A count
mismatch means another process changed the directory mid-listing and is a
fatal ``ConsistencyError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .entry_model.fs import Filesystem, SystemFilesystem, entry_from_path
from .entry_model.types import Entry
from .errors import ConsistencyError
from .options import ListingOptions

logger = logging.getLogger(__name__)


def is_dot_dir(name: str) -> bool:
    return name in (".", "..")


def is_hidden(name: str) -> bool:
    """Whether ``name`` starts with ``.`` and is not ``.`` or ``..``."""
    return name.startswith(".") and not is_dot_dir(name)


def is_visible(name: str, options: ListingOptions) -> bool:
    """``a`` shows everything; ``A`` shows hidden names but not ``.``/``..``."""
    if is_dot_dir(name):
        return options.show_all
    if is_hidden(name):
        return options.show_all or options.show_almost_all
    return True


def collect_directory(
    path: str,
    options: ListingOptions,
    filesystem: Filesystem | None = None,
) -> list[Entry]:
    """Return visible entries of ``path`` in enumeration order."""
    filesystem = SystemFilesystem() if filesystem is None else filesystem

    expected = len(filesystem.list_names(path))
    names = filesystem.list_names(path)
    if len(names) != expected:
        raise ConsistencyError(path, expected, len(names))

    entries = [entry_from_path(filesystem, path, name) for name in names if is_visible(name, options)]
    logger.debug("collected %d of %d names from %s", len(entries), expected, path)
    return entries


def block_total(entries: Iterable[Entry], options: ListingOptions) -> int:
    """Sum 512-byte blocks over the entries that are displayed."""
    return sum(entry.metadata.blocks for entry in entries if entry.operand or is_visible(entry.name, options))


__all__ = [
    "is_dot_dir",
    "is_hidden",
    "is_visible",
    "collect_directory",
    "block_total",
]
