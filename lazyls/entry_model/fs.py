"""Filesystem access for listing: enumeration, ``lstat`` and ``readlink``.

``Filesystem`` is the seam tests replace with fakes. ``SystemFilesystem``
is the thin OS-backed implementation; every ``OSError`` surfaces as a
``ResourceError`` naming the operation and path.
"""

from __future__ import annotations

import os
import stat
from typing import Protocol

from ..errors import ResourceError
from .types import Entry, EntryMetadata, full_path


class Filesystem(Protocol):
    def list_names(self, directory: str) -> list[str]:
        """Return every name in ``directory``, including ``.`` and ``..``."""

    def lstat(self, path: str) -> os.stat_result:
        """Return ``lstat`` results without following a final symlink."""

    def readlink(self, path: str) -> str:
        """Return the target text of symlink ``path``."""


class SystemFilesystem:
    """``Filesystem`` backed by ``os`` calls."""

    def list_names(self, directory: str) -> list[str]:
        try:
            names = os.listdir(directory)
        except OSError as exc:
            raise ResourceError("opendir", directory, exc) from exc
        return [".", "..", *names]

    def lstat(self, path: str) -> os.stat_result:
        try:
            return os.lstat(path)
        except OSError as exc:
            raise ResourceError("lstat", path, exc) from exc

    def readlink(self, path: str) -> str:
        try:
            return os.readlink(path)
        except OSError as exc:
            raise ResourceError("readlink", path, exc) from exc


def metadata_from_stat(st: os.stat_result, symlink_target: str | None = None) -> EntryMetadata:
    """Copy the listed fields out of a ``stat_result``."""
    device_numbers: tuple[int, int] | None = None
    if stat.S_ISBLK(st.st_mode) or stat.S_ISCHR(st.st_mode):
        device_numbers = (os.major(st.st_rdev), os.minor(st.st_rdev))
    return EntryMetadata(
        mode=st.st_mode,
        size=int(st.st_size),
        blocks=int(getattr(st, "st_blocks", 0)),
        inode=int(st.st_ino),
        link_count=int(st.st_nlink),
        owner_id=int(st.st_uid),
        group_id=int(st.st_gid),
        access_time=st.st_atime,
        modify_time=st.st_mtime,
        change_time=st.st_ctime,
        device_numbers=device_numbers,
        symlink_target=symlink_target,
    )


def read_metadata(filesystem: Filesystem, path: str) -> EntryMetadata:
    """``lstat`` ``path`` and read its link target when it is a symlink."""
    st = filesystem.lstat(path)
    target = filesystem.readlink(path) if stat.S_ISLNK(st.st_mode) else None
    return metadata_from_stat(st, target)


def entry_from_path(filesystem: Filesystem, directory: str, name: str) -> Entry:
    """Build the entry for ``name`` inside ``directory``."""
    return Entry(
        name=name,
        metadata=read_metadata(filesystem, full_path(directory, name)),
        directory=directory,
    )


def entry_from_operand(filesystem: Filesystem, path: str) -> Entry:
    """Build the entry for a command-line operand, named as typed."""
    return Entry(
        name=path,
        metadata=read_metadata(filesystem, path),
        operand=True,
    )


__all__ = [
    "Filesystem",
    "SystemFilesystem",
    "metadata_from_stat",
    "read_metadata",
    "entry_from_path",
    "entry_from_operand",
]
