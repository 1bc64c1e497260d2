"""Domain model for listed filesystem entries.

This package contains non-rendering primitives:
- entry/metadata datatypes with bounded-name validation
- the filesystem collaborator used to enumerate and ``lstat`` paths
"""

from __future__ import annotations

from .types import (
    NAME_MAX,
    PATH_MAX,
    Entry,
    EntryMetadata,
    full_path,
    validate_name,
    validate_path,
)
from .fs import (
    Filesystem,
    SystemFilesystem,
    entry_from_operand,
    entry_from_path,
    metadata_from_stat,
    read_metadata,
)

__all__ = [
    "NAME_MAX",
    "PATH_MAX",
    "Entry",
    "EntryMetadata",
    "full_path",
    "validate_name",
    "validate_path",
    "Filesystem",
    "SystemFilesystem",
    "entry_from_operand",
    "entry_from_path",
    "metadata_from_stat",
    "read_metadata",
]
