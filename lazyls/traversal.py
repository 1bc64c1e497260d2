"""Walk operands and directories, driving sort, render and layout.

Output order: non-directory operands first as one listing, then each
directory operand, each followed by its subdirectories when recursing.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TextIO

from .collector import block_total, collect_directory
from .entry_model.fs import Filesystem, SystemFilesystem, entry_from_operand
from .entry_model.types import Entry
from .layout import layout_records, policy_for
from .options import ListingOptions
from .render.fields import display_name, render_block_total, render_entry
from .render.identity import IdentityResolver, SystemIdentityResolver
from .render.record import RenderedRecord
from .sorting import sort_for_listing, sort_operands

CURRENT_DIRECTORY = "."

logger = logging.getLogger(__name__)


class Lister:
    """One listing run bound to its options, output stream and collaborators.

    ``now`` is captured once so every timestamp in the run is judged
    recent or old against the same clock.
    """

    def __init__(
        self,
        options: ListingOptions,
        out: TextIO,
        filesystem: Filesystem | None = None,
        identity: IdentityResolver | None = None,
        now: float | None = None,
    ) -> None:
        self.options = options
        self.out = out
        self.filesystem = SystemFilesystem() if filesystem is None else filesystem
        self.identity = SystemIdentityResolver() if identity is None else identity
        self.now = time.time() if now is None else now
        self.policy = policy_for(options)

    def render(self, entries: Sequence[Entry]) -> list[RenderedRecord]:
        return [
            render_entry(
                entry,
                self.options,
                identity=self.identity,
                filesystem=self.filesystem,
                now=self.now,
            )
            for entry in entries
        ]

    def print_entries(self, entries: Sequence[Entry]) -> None:
        """Lay out and write ``entries`` in their current order."""
        for line in layout_records(self.render(entries), self.options.terminal_width, self.policy):
            self.out.write(line + "\n")

    def list_operands(self, paths: Sequence[str]) -> None:
        """List command-line operands, or the current directory when there are none."""
        if not paths:
            if self.options.directory_only:
                self.print_entries([entry_from_operand(self.filesystem, CURRENT_DIRECTORY)])
            else:
                self.list_directory(CURRENT_DIRECTORY, show_header=False, depth=0)
            return

        entries = [entry_from_operand(self.filesystem, path) for path in paths]
        files, directories = sort_operands(entries)
        if self.options.directory_only:
            self.print_entries([*files, *directories])
            return

        if files:
            self.print_entries(files)
            if directories:
                self.out.write("\n")

        show_header = len(paths) > 1
        for depth, directory in enumerate(directories):
            self.list_directory(directory.name, show_header=show_header, depth=depth)

    def list_directory(self, path: str, show_header: bool, depth: int) -> None:
        """List one directory and, with ``R``, its subdirectories in pre-order.

        Pending directories live on an explicit stack, so tree depth is bounded
        only by path length.
        """
        pending = [(path, depth)]
        while pending:
            path, depth = pending.pop()
            entries = self.list_one_directory(path, show_header, depth)
            if not self.options.recursive:
                continue
            subdirectories = [entry.path for entry in entries if entry.metadata.is_dir and not entry.is_dot_dir]
            logger.debug("queued %d subdirectories of %s", len(subdirectories), path)
            pending.extend((subdirectory, depth + 1) for subdirectory in reversed(subdirectories))

    def list_one_directory(self, path: str, show_header: bool, depth: int) -> list[Entry]:
        """Write one directory's listing and return its entries in printed order.

        The directory is collected before anything is written, so a failed
        snapshot leaves no partial output for it.
        """
        entries = collect_directory(path, self.options, self.filesystem)
        if depth > 0:
            self.out.write("\n")
        if show_header or self.options.recursive:
            self.out.write(f"{display_name(path, self.options)}:\n")

        if not self.options.no_sort:
            entries = sort_for_listing(entries, self.options.sort_key, self.options.direction)

        if self.options.prints_block_total:
            total = block_total(entries, self.options)
            self.out.write(render_block_total(total, self.options) + "\n")

        self.print_entries(entries)
        return entries


__all__ = [
    "CURRENT_DIRECTORY",
    "Lister",
]
