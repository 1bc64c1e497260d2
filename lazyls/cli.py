"""Command-line front door for lazyls.

Parses single-character flags into ``ListingOptions``, applies terminal and
environment defaults, then hands operands to the ``Lister``. Fatal listing
errors become one diagnostic line and exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import TextIO

from .config import load_default_flags, resolve_block_size, resolve_columns
from .errors import LsError
from .options import LayoutMode, ListingOptions, QuoteMode
from .traversal import Lister

PROG = "lazyls"
FLAG_CHARS = "AaCcdFfhiklnqRrSstuwx1"
USAGE = f"{PROG} [-{FLAG_CHARS}] [file ...]"
LOG_LEVEL_ENV = "LAZYLS_LOG_LEVEL"

_BOOLEAN_FLAGS = {
    "a": "show_all",
    "A": "show_almost_all",
    "d": "directory_only",
    "F": "type_suffix",
    "f": "no_sort",
    "h": "human_size",
    "i": "inode",
    "k": "kilobyte_size",
    "R": "recursive",
    "r": "reverse",
    "S": "sort_by_size",
    "s": "block_count",
    "t": "sort_by_time",
}
_LAYOUT_FLAGS = {mode.value: mode for mode in LayoutMode}
_QUOTE_FLAGS = {mode.value: mode for mode in QuoteMode}


class _UsageParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise SystemExit(f"{PROG}: {message}\nusage: {USAGE}")


def build_parser() -> argparse.ArgumentParser:
    """Parser that records every flag, in command-line order, into ``flags``."""
    parser = _UsageParser(prog=PROG, usage=USAGE, add_help=False)
    for char in FLAG_CHARS:
        parser.add_argument(f"-{char}", dest="flags", action="append_const", const=char, default=[])
    parser.add_argument("paths", nargs="*", help="Files or directories to list. Defaults to '.'.")
    return parser


def options_from_flags(
    flags: Sequence[str],
    output_is_terminal: bool,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
    is_superuser: bool = False,
) -> ListingOptions:
    """Fold flags in order into options; later flags win within a group.

    Without an explicit choice, terminals get ``q`` and ``C`` while other
    outputs get ``w`` and ``1``. ``A`` is always on for the super-user.
    """
    values: dict[str, object] = {}
    layout: LayoutMode | None = None
    quoting: QuoteMode | None = None
    for char in flags:
        if char in _BOOLEAN_FLAGS:
            values[_BOOLEAN_FLAGS[char]] = True
        elif char in _LAYOUT_FLAGS:
            layout = _LAYOUT_FLAGS[char]
        elif char in _QUOTE_FLAGS:
            quoting = _QUOTE_FLAGS[char]
        elif char == "c":
            values["change_time"] = True
            values["access_time"] = False
        elif char == "u":
            values["access_time"] = True
            values["change_time"] = False
        else:
            raise ValueError(f"unknown flag {char!r}")

    if is_superuser:
        values["show_almost_all"] = True
    if layout is None:
        layout = LayoutMode.COLUMNS if output_is_terminal else LayoutMode.SINGLE
    if quoting is None:
        quoting = QuoteMode.QUOTE if output_is_terminal else QuoteMode.RAW

    return ListingOptions(
        layout=layout,
        quoting=quoting,
        block_size=resolve_block_size(environ),
        terminal_width=resolve_columns(environ, stream),
        output_is_terminal=output_is_terminal,
        **values,
    )


def _configured_flags() -> list[str]:
    """Default flags from the user config, restricted to known flag characters."""
    return [char for char in load_default_flags() if char in FLAG_CHARS]


def _configure_logging(environ: Mapping[str, str]) -> None:
    level_name = environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format=f"{PROG}: %(name)s: %(levelname)s: %(message)s")


def _is_superuser() -> bool:
    return os.getuid() == 0


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and list the requested paths on stdout.

    ``argv`` excludes the program name and defaults to ``sys.argv[1:]``.
    """
    _configure_logging(os.environ)
    args = build_parser().parse_args(sys.argv[1:] if argv is None else list(argv))

    stdout = sys.stdout
    output_is_terminal = stdout.isatty()
    options = options_from_flags(
        [*_configured_flags(), *args.flags],
        output_is_terminal,
        environ=os.environ,
        stream=stdout,
        is_superuser=_is_superuser(),
    )
    if hasattr(stdout, "reconfigure"):
        stdout.reconfigure(errors="surrogateescape")

    try:
        Lister(options, stdout).list_operands(args.paths)
    except (LsError, OSError, MemoryError) as exc:
        stdout.flush()
        detail = str(exc) or type(exc).__name__
        raise SystemExit(f"{PROG}: {detail}") from exc


if __name__ == "__main__":
    main()
