"""Field rendering tests: sizes, modes, times, suffixes and whole records."""

from __future__ import annotations

import stat
import time
import unittest

from lazyls.entry_model import Entry, EntryMetadata
from lazyls.errors import CapacityError
from lazyls.options import LayoutMode, ListingOptions, QuoteMode
from lazyls.render import (
    NumericIdentityResolver,
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
from lazyls.render.fields import RECENT_SECONDS

NOW = 1_700_000_000.0


class _NamedIdentity:
    def user_name(self, uid: int) -> str | None:
        return {1000: "alice"}.get(uid)

    def group_name(self, gid: int) -> str | None:
        return {100: "staff"}.get(gid)


class _FakeFilesystem:
    def __init__(self, modes: dict[str, int] | None = None) -> None:
        self.modes = modes or {}

    def lstat(self, path: str):
        if path not in self.modes:
            raise FileNotFoundError(path)
        return _Stat(self.modes[path])

    def readlink(self, path: str) -> str:
        raise AssertionError("link targets come from metadata")

    def list_names(self, directory: str) -> list[str]:
        return [".", ".."]


class _Stat:
    def __init__(self, mode: int) -> None:
        self.st_mode = mode


def _entry(name: str = "file.txt", directory: str = "dir", **metadata) -> Entry:
    metadata.setdefault("mode", stat.S_IFREG | 0o644)
    return Entry(name=name, metadata=EntryMetadata(**metadata), directory=directory)


class SizeFormattingTests(unittest.TestCase):
    def test_human_size_examples(self) -> None:
        self.assertEqual(format_human_size(0), "0")
        self.assertEqual(format_human_size(500), "500")
        self.assertEqual(format_human_size(999), "999")
        self.assertEqual(format_human_size(1000), "1.0K")
        self.assertEqual(format_human_size(1023), "1.0K")
        self.assertEqual(format_human_size(1536), "1.5K")
        self.assertEqual(format_human_size(10 * 1024), "10K")
        self.assertEqual(format_human_size(1024 * 1024), "1.0M")
        self.assertEqual(format_human_size(5 * 1024**3), "5.0G")

    def test_kilobytes_round_up(self) -> None:
        self.assertEqual(format_kilobytes(0), "0")
        self.assertEqual(format_kilobytes(1), "1")
        self.assertEqual(format_kilobytes(1024), "1")
        self.assertEqual(format_kilobytes(1025), "2")

    def test_block_count_honors_block_size(self) -> None:
        self.assertEqual(format_blocks(8, ListingOptions()), "8")
        self.assertEqual(format_blocks(8, ListingOptions(block_size=1024)), "4")
        self.assertEqual(format_blocks(3, ListingOptions(block_size=1024)), "2")
        self.assertEqual(format_blocks(8, ListingOptions(kilobyte_size=True)), "4")
        self.assertEqual(format_blocks(8, ListingOptions(human_size=True)), "4.0K")

    def test_size_field_variants(self) -> None:
        regular = EntryMetadata(mode=stat.S_IFREG | 0o644, size=2048)
        device = EntryMetadata(mode=stat.S_IFCHR | 0o600, size=0, device_numbers=(4, 64))
        self.assertEqual(format_size(regular, ListingOptions()), "2048")
        self.assertEqual(format_size(regular, ListingOptions(human_size=True)), "2.0K")
        self.assertEqual(format_size(regular, ListingOptions(kilobyte_size=True)), "2")
        self.assertEqual(format_size(device, ListingOptions(human_size=True)), "4,64")

    def test_block_total_line(self) -> None:
        self.assertEqual(render_block_total(16, ListingOptions()), "total 16")
        self.assertEqual(render_block_total(16, ListingOptions(human_size=True)), "total 8.0K")


class ModeAndSuffixTests(unittest.TestCase):
    def test_mode_string_types_and_permissions(self) -> None:
        self.assertEqual(mode_string(stat.S_IFREG | 0o644), "-rw-r--r--")
        self.assertEqual(mode_string(stat.S_IFDIR | 0o755), "drwxr-xr-x")
        self.assertEqual(mode_string(stat.S_IFLNK | 0o777), "lrwxrwxrwx")
        self.assertEqual(mode_string(stat.S_IFIFO | 0o600), "prw-------")

    def test_mode_string_special_bits(self) -> None:
        self.assertEqual(mode_string(stat.S_IFREG | 0o4755), "-rwsr-xr-x")
        self.assertEqual(mode_string(stat.S_IFREG | 0o4644), "-rwSr--r--")
        self.assertEqual(mode_string(stat.S_IFREG | 0o2755), "-rwxr-sr-x")
        self.assertEqual(mode_string(stat.S_IFDIR | 0o1777), "drwxrwxrwt")
        self.assertEqual(mode_string(stat.S_IFDIR | 0o1776), "drwxrwxrwT")

    def test_type_suffix_per_kind(self) -> None:
        self.assertEqual(type_suffix(stat.S_IFDIR | 0o755, long_format=False), "/")
        self.assertEqual(type_suffix(stat.S_IFIFO | 0o644, long_format=False), "|")
        self.assertEqual(type_suffix(stat.S_IFLNK | 0o777, long_format=False), "@")
        self.assertEqual(type_suffix(stat.S_IFLNK | 0o777, long_format=True), "")
        self.assertEqual(type_suffix(stat.S_IFSOCK | 0o755, long_format=False), "=")
        self.assertEqual(type_suffix(0o160000, long_format=False), "%")
        self.assertEqual(type_suffix(stat.S_IFREG | 0o744, long_format=False), "*")
        self.assertEqual(type_suffix(stat.S_IFREG | 0o644, long_format=False), "")


class TimeFormattingTests(unittest.TestCase):
    def test_recent_time_shows_clock(self) -> None:
        stamp = NOW - 3600
        self.assertEqual(format_time(stamp, NOW), time.strftime("%b %d %H:%M", time.localtime(stamp)))

    def test_threshold_is_six_thirty_day_months(self) -> None:
        just_recent = NOW - RECENT_SECONDS + 1
        just_old = NOW - RECENT_SECONDS
        self.assertEqual(format_time(just_recent, NOW), time.strftime("%b %d %H:%M", time.localtime(just_recent)))
        self.assertEqual(format_time(just_old, NOW), time.strftime("%b %d %Y", time.localtime(just_old)))
        self.assertEqual(RECENT_SECONDS, 15_552_000)

    def test_future_time_counts_as_recent(self) -> None:
        stamp = NOW + 86_400
        self.assertEqual(format_time(stamp, NOW), time.strftime("%b %d %H:%M", time.localtime(stamp)))


class RenderEntryTests(unittest.TestCase):
    def test_plain_name_only(self) -> None:
        record = render_entry(_entry(), ListingOptions(), now=NOW)
        self.assertEqual(record.fields, ("file.txt",))

    def test_inode_and_blocks_precede_name(self) -> None:
        options = ListingOptions(inode=True, block_count=True)
        record = render_entry(_entry(inode=42, blocks=8), options, now=NOW)
        self.assertEqual(record.fields, ("42", "8", "file.txt"))

    def test_long_format_cluster(self) -> None:
        modified = NOW - 60
        entry = _entry(size=123, link_count=2, owner_id=1000, group_id=100, modify_time=modified)
        options = ListingOptions(layout=LayoutMode.LONG)
        record = render_entry(entry, options, identity=_NamedIdentity(), now=NOW)
        self.assertEqual(
            record.fields,
            (
                "-rw-r--r--",
                "2",
                "alice",
                "staff",
                "123",
                time.strftime("%b %d %H:%M", time.localtime(modified)),
                "file.txt",
            ),
        )

    def test_numeric_ids_and_lookup_fallback(self) -> None:
        entry = _entry(owner_id=1000, group_id=4242)
        numeric = render_entry(
            entry, ListingOptions(layout=LayoutMode.NUMERIC_LONG), identity=_NamedIdentity(), now=NOW
        )
        self.assertEqual(numeric.fields[2:4], ("1000", "4242"))

        long_record = render_entry(entry, ListingOptions(layout=LayoutMode.LONG), identity=_NamedIdentity(), now=NOW)
        self.assertEqual(long_record.fields[2:4], ("alice", "4242"))

        unresolved = render_entry(
            entry, ListingOptions(layout=LayoutMode.LONG), identity=NumericIdentityResolver(), now=NOW
        )
        self.assertEqual(unresolved.fields[2:4], ("1000", "4242"))

    def test_timestamp_selection(self) -> None:
        entry = _entry(modify_time=NOW - 10, access_time=NOW - 20_000_000, change_time=NOW - 30_000_000)
        identity = NumericIdentityResolver()
        access = render_entry(entry, ListingOptions(layout=LayoutMode.LONG, access_time=True), identity=identity, now=NOW)
        change = render_entry(entry, ListingOptions(layout=LayoutMode.LONG, change_time=True), identity=identity, now=NOW)
        self.assertEqual(access.fields[5], time.strftime("%b %d %Y", time.localtime(NOW - 20_000_000)))
        self.assertEqual(change.fields[5], time.strftime("%b %d %Y", time.localtime(NOW - 30_000_000)))

    def test_nonprintable_names_are_quoted_only_in_quote_mode(self) -> None:
        entry = _entry(name="bad\tname\x07")
        quoted = render_entry(entry, ListingOptions(quoting=QuoteMode.QUOTE), now=NOW)
        raw = render_entry(entry, ListingOptions(quoting=QuoteMode.RAW), now=NOW)
        self.assertEqual(quoted.fields, ("bad?name?",))
        self.assertEqual(raw.fields, ("bad\tname\x07",))

    def test_type_suffix_joins_name_field(self) -> None:
        directory = _entry(name="sub", mode=stat.S_IFDIR | 0o755)
        record = render_entry(directory, ListingOptions(type_suffix=True), now=NOW)
        self.assertEqual(record.fields, ("sub/",))

    def test_symlink_target_in_long_format(self) -> None:
        link = _entry(name="link", mode=stat.S_IFLNK | 0o777, symlink_target="target")
        filesystem = _FakeFilesystem({"dir/target": stat.S_IFDIR | 0o755})
        options = ListingOptions(layout=LayoutMode.LONG, type_suffix=True)
        record = render_entry(link, options, identity=NumericIdentityResolver(), filesystem=filesystem, now=NOW)
        self.assertEqual(record.fields[-1], "link -> target/")

        plain = render_entry(link, ListingOptions(type_suffix=True), filesystem=filesystem, now=NOW)
        self.assertEqual(plain.fields, ("link@",))

    def test_unresolvable_link_target_skips_suffix(self) -> None:
        link = _entry(name="dangling", mode=stat.S_IFLNK | 0o777, symlink_target="/nowhere")
        options = ListingOptions(layout=LayoutMode.LONG, type_suffix=True)
        record = render_entry(link, options, identity=NumericIdentityResolver(), filesystem=_FakeFilesystem(), now=NOW)
        self.assertEqual(record.fields[-1], "dangling -> /nowhere")

    def test_link_target_past_path_limit_skips_suffix(self) -> None:
        directory = "/" + "/".join(["d" * 200] * 19)
        link = _entry(name="link", directory=directory, mode=stat.S_IFLNK | 0o777, symlink_target="t" * 300)
        options = ListingOptions(layout=LayoutMode.LONG, type_suffix=True)
        record = render_entry(link, options, identity=NumericIdentityResolver(), filesystem=_FakeFilesystem(), now=NOW)
        self.assertEqual(record.fields[-1], "link -> " + "t" * 300)

    def test_device_size_field(self) -> None:
        device = _entry(name="tty0", mode=stat.S_IFCHR | 0o620, device_numbers=(4, 0))
        record = render_entry(device, ListingOptions(layout=LayoutMode.LONG), identity=NumericIdentityResolver(), now=NOW)
        self.assertEqual(record.fields[4], "4,0")
        self.assertTrue(record.fields[0].startswith("c"))

    def test_rendering_is_idempotent(self) -> None:
        entry = _entry(inode=7, blocks=2, size=99, modify_time=NOW - 5)
        options = ListingOptions(layout=LayoutMode.LONG, inode=True, block_count=True)
        identity = NumericIdentityResolver()
        first = render_entry(entry, options, identity=identity, now=NOW)
        second = render_entry(entry, options, identity=identity, now=NOW)
        self.assertEqual(first, second)

    def test_overflowing_record_raises_capacity_error(self) -> None:
        link = _entry(name="link", mode=stat.S_IFLNK | 0o777, symlink_target="t" * 600)
        with self.assertRaises(CapacityError):
            render_entry(link, ListingOptions(layout=LayoutMode.LONG), identity=NumericIdentityResolver(), now=NOW)


if __name__ == "__main__":
    unittest.main()
