"""Turn entry metadata into delimited, printable fields.

``render_entry`` is a pure function of the entry, the options and the
reference clock, apart from owner/group lookups and the best-effort
``lstat`` of a symlink's target for its type suffix.
"""

from __future__ import annotations

import os
import stat
import time

from ..entry_model.fs import Filesystem, SystemFilesystem
from ..entry_model.types import Entry, EntryMetadata, full_path
from ..errors import CapacityError, LsError, ResourceError
from ..options import ListingOptions, TimeField
from .identity import IdentityResolver, SystemIdentityResolver
from .record import LINE_SIZE, LineBuffer, RenderedRecord
from .text import quote_nonprintable

S_IFWHT = 0o160000
SIZE_UNITS = "KMGTPE"
RECENT_SECONDS = 6 * 30 * 24 * 60 * 60
RECENT_FORMAT = "%b %d %H:%M"
OLD_FORMAT = "%b %d %Y"

_TYPE_CHARS = {
    stat.S_IFREG: "-",
    stat.S_IFDIR: "d",
    stat.S_IFLNK: "l",
    stat.S_IFCHR: "c",
    stat.S_IFBLK: "b",
    stat.S_IFIFO: "p",
    stat.S_IFSOCK: "s",
    S_IFWHT: "w",
}


def format_human_size(size: int) -> str:
    """Render a byte count with at most three significant digits and a unit.

    Divides by 1024 while the value is at least 1000; values below 10 keep one
    fractional digit. Plain bytes carry no unit letter.
    """
    value = float(size)
    unit = 0
    while value >= 1000:
        value /= 1024
        unit += 1
    digits = 0 if value >= 10 or value == 0 else 1
    text = f"{value:.{digits}f}"
    if 0 < unit <= len(SIZE_UNITS):
        text += SIZE_UNITS[unit - 1]
    return text


def format_kilobytes(size: int) -> str:
    """Render bytes as kilobytes, rounding any remainder up."""
    return str(-(-size // 1024))


def blocks_in_units(blocks: int, block_size: int) -> int:
    """Convert 512-byte ``st_blocks`` into ``block_size`` units, rounding up."""
    return -(-(blocks * 512) // block_size)


def format_blocks(blocks: int, options: ListingOptions) -> str:
    """Render a 512-byte block count honoring ``h``, ``k`` and the block unit."""
    if options.human_size:
        return format_human_size(blocks * 512)
    if options.kilobyte_size:
        return format_kilobytes(blocks * 512)
    return str(blocks_in_units(blocks, options.block_size))


def format_size(metadata: EntryMetadata, options: ListingOptions) -> str:
    if metadata.device_numbers is not None:
        major, minor = metadata.device_numbers
        return f"{major},{minor}"
    if options.human_size:
        return format_human_size(metadata.size)
    if options.kilobyte_size:
        return format_kilobytes(metadata.size)
    return str(metadata.size)


def mode_string(mode: int) -> str:
    """Ten-character type and permission string, ``ls -l`` style."""
    chars = [_TYPE_CHARS.get(stat.S_IFMT(mode), "?")]
    for read, write, execute in (
        (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR),
        (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP),
        (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH),
    ):
        chars.append("r" if mode & read else "-")
        chars.append("w" if mode & write else "-")
        chars.append("x" if mode & execute else "-")

    for special, index, lower, upper in (
        (stat.S_ISUID, 3, "s", "S"),
        (stat.S_ISGID, 6, "s", "S"),
        (stat.S_ISVTX, 9, "t", "T"),
    ):
        if mode & special:
            chars[index] = lower if chars[index] == "x" else upper
    return "".join(chars)


def selected_time(metadata: EntryMetadata, field: TimeField) -> float:
    if field is TimeField.CHANGE:
        return metadata.change_time
    if field is TimeField.ACCESS:
        return metadata.access_time
    return metadata.modify_time


def format_time(timestamp: float, now: float) -> str:
    """Format ``timestamp`` with time of day when recent, else with the year.

    "Recent" means less than six 30-day months before ``now``.
    """
    try:
        local = time.localtime(timestamp)
    except (OverflowError, OSError, ValueError) as exc:
        raise LsError(f"localtime error for timestamp {timestamp}") from exc
    pattern = RECENT_FORMAT if (int(now) - int(timestamp)) < RECENT_SECONDS else OLD_FORMAT
    return time.strftime(pattern, local)


def type_suffix(mode: int, long_format: bool) -> str:
    """Indicator appended after a name by ``F``."""
    kind = stat.S_IFMT(mode)
    if kind == stat.S_IFDIR:
        return "/"
    if kind == stat.S_IFIFO:
        return "|"
    if kind == stat.S_IFLNK:
        # Long listings show the link target instead.
        return "" if long_format else "@"
    if kind == stat.S_IFSOCK:
        return "="
    if kind == S_IFWHT:
        return "%"
    if mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
        return "*"
    return ""


def display_name(text: str, options: ListingOptions) -> str:
    return quote_nonprintable(text) if options.quote_nonprintable else text


def _owner_text(metadata: EntryMetadata, options: ListingOptions, identity: IdentityResolver) -> str:
    name = None if options.numeric_ids else identity.user_name(metadata.owner_id)
    return str(metadata.owner_id) if name is None else display_name(name, options)


def _group_text(metadata: EntryMetadata, options: ListingOptions, identity: IdentityResolver) -> str:
    name = None if options.numeric_ids else identity.group_name(metadata.group_id)
    return str(metadata.group_id) if name is None else display_name(name, options)


def _link_target_suffix(entry: Entry, target: str, options: ListingOptions, filesystem: Filesystem) -> str:
    """Type suffix of the resolved target, or ``""`` when it cannot be ``lstat``-ed."""
    try:
        if target.startswith("/"):
            target_path = target
        else:
            target_path = full_path(os.path.dirname(entry.path), target)
        target_stat = filesystem.lstat(target_path)
    except (CapacityError, ResourceError, OSError):
        return ""
    return type_suffix(target_stat.st_mode, options.long_format)


def render_entry(
    entry: Entry,
    options: ListingOptions,
    *,
    identity: IdentityResolver | None = None,
    filesystem: Filesystem | None = None,
    now: float | None = None,
    capacity: int = LINE_SIZE,
) -> RenderedRecord:
    """Render ``entry`` into its ordered fields for ``options``.

    Field order: inode, blocks, the long-format cluster (mode, links, owner,
    group, size, time), and finally the name with its type suffix and link
    target. Only fields enabled by ``options`` are present.
    """
    identity = SystemIdentityResolver() if identity is None else identity
    filesystem = SystemFilesystem() if filesystem is None else filesystem
    now = time.time() if now is None else now
    metadata = entry.metadata
    buffer = LineBuffer(capacity)

    if options.inode:
        buffer.write(str(metadata.inode), "inode")
        buffer.delimit()

    if options.block_count:
        buffer.write(format_blocks(metadata.blocks, options), "block count")
        buffer.delimit()

    if options.long_format:
        buffer.write(mode_string(metadata.mode), "mode")
        buffer.delimit()
        buffer.write(str(metadata.link_count), "link count")
        buffer.delimit()
        buffer.write(_owner_text(metadata, options, identity), "owner")
        buffer.delimit()
        buffer.write(_group_text(metadata, options, identity), "group")
        buffer.delimit()
        buffer.write(format_size(metadata, options), "size")
        buffer.delimit()
        buffer.write(format_time(selected_time(metadata, options.time_field), now), "time")
        buffer.delimit()

    buffer.write(display_name(entry.name, options), "name")

    if options.type_suffix:
        buffer.write(type_suffix(metadata.mode, options.long_format), "type symbol")

    if options.long_format and metadata.is_symlink:
        target = metadata.symlink_target
        if target is None:
            target = filesystem.readlink(entry.path)
        buffer.write(f" -> {target}", "link target")
        if options.type_suffix:
            buffer.write(_link_target_suffix(entry, target, options, filesystem), "type symbol")

    return buffer.finish()


def render_block_total(total_blocks: int, options: ListingOptions) -> str:
    """The ``total`` line printed above a directory's entries."""
    return f"total {format_blocks(total_blocks, options)}"


__all__ = [
    "S_IFWHT",
    "RECENT_SECONDS",
    "format_human_size",
    "format_kilobytes",
    "blocks_in_units",
    "format_blocks",
    "format_size",
    "mode_string",
    "selected_time",
    "format_time",
    "type_suffix",
    "display_name",
    "render_entry",
    "render_block_total",
]
