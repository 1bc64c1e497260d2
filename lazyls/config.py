"""Environment and user-config helpers.

Resolves the block unit and display width from ``BLOCKSIZE``/``COLUMNS``
and reads optional default flags from a JSON user config. All access is
defensive: malformed or missing values fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from platformdirs import user_config_dir

APP_NAME = "lazyls"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_BLOCK_SIZE = 512
DEFAULT_COLUMNS = 80

logger = logging.getLogger(__name__)


def _positive_int(raw: str | None) -> int | None:
    """Parse a positive decimal integer, returning ``None`` when invalid."""
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def resolve_block_size(environ: Mapping[str, str] | None = None) -> int:
    """Return ``BLOCKSIZE`` when it is a positive integer, else 512."""
    env = os.environ if environ is None else environ
    value = _positive_int(env.get("BLOCKSIZE"))
    return DEFAULT_BLOCK_SIZE if value is None else value


def resolve_columns(environ: Mapping[str, str] | None = None, stream: TextIO | None = None) -> int:
    """Resolve display width.

    ``COLUMNS`` wins when it is a positive integer; otherwise the terminal
    size of ``stream`` is used when it is a terminal; otherwise 80.
    """
    env = os.environ if environ is None else environ
    value = _positive_int(env.get("COLUMNS"))
    if value is not None:
        return value
    if stream is not None:
        try:
            if stream.isatty():
                columns = os.get_terminal_size(stream.fileno()).columns
                if columns > 0:
                    return columns
        except (AttributeError, OSError, ValueError):
            pass
    return DEFAULT_COLUMNS


def load_config() -> dict[str, object]:
    """Load the JSON user config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_default_flags() -> str:
    """Return configured default flag characters, or ``""``.

    Only strings are accepted; a leading ``-`` is tolerated.
    """
    value = load_config().get("default_flags")
    if not isinstance(value, str):
        return ""
    return value.strip().lstrip("-")


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_BLOCK_SIZE",
    "DEFAULT_COLUMNS",
    "resolve_block_size",
    "resolve_columns",
    "load_config",
    "load_default_flags",
]
