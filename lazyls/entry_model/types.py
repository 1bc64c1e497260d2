"""Domain datatypes for listed filesystem entries."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

from ..errors import CapacityError

NAME_MAX = 255
PATH_MAX = 4096


def encoded_length(text: str) -> int:
    """Length of ``text`` in bytes under the filesystem encoding."""
    return len(os.fsencode(text))


def validate_name(name: str) -> str:
    """Reject directory-child names that are empty, contain ``/``, or exceed ``NAME_MAX``."""
    if not name or "/" in name:
        raise CapacityError(f"invalid file name {name!r}")
    if encoded_length(name) > NAME_MAX:
        raise CapacityError(f"file name too long {name}")
    return name


def validate_path(path: str) -> str:
    """Reject paths that exceed ``PATH_MAX``."""
    if encoded_length(path) >= PATH_MAX:
        raise CapacityError(f"path {path} too long")
    return path


def full_path(directory: str, name: str) -> str:
    """Join ``name`` onto ``directory`` with a single separator.

    An empty ``directory`` yields ``name`` unchanged (command-line operands).
    """
    if not directory:
        return validate_path(name)
    if not name:
        return validate_path(directory)
    separator = "" if directory.endswith("/") else "/"
    return validate_path(f"{directory}{separator}{name}")


@dataclass(frozen=True)
class EntryMetadata:
    """Metadata observed by one ``lstat`` call, plus the link target for symlinks."""

    mode: int
    size: int = 0
    blocks: int = 0
    inode: int = 0
    link_count: int = 1
    owner_id: int = 0
    group_id: int = 0
    access_time: float = 0.0
    modify_time: float = 0.0
    change_time: float = 0.0
    device_numbers: tuple[int, int] | None = None
    symlink_target: str | None = None

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)


@dataclass(frozen=True)
class Entry:
    """One filesystem object as listed.

    ``name`` is a directory child's name, or for command-line operands
    (``operand=True``) the path exactly as typed. ``directory`` is the path
    the child was found in; operands have an empty ``directory``.
    """

    name: str
    metadata: EntryMetadata
    directory: str = ""
    operand: bool = False

    def __post_init__(self) -> None:
        if self.operand:
            validate_path(self.name)
        else:
            validate_name(self.name)

    @property
    def path(self) -> str:
        return full_path(self.directory, self.name)

    @property
    def is_dot_dir(self) -> bool:
        return self.name in (".", "..")


__all__ = [
    "NAME_MAX",
    "PATH_MAX",
    "encoded_length",
    "validate_name",
    "validate_path",
    "full_path",
    "EntryMetadata",
    "Entry",
]
