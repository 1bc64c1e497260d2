"""Owner and group name lookups with numeric fallback."""

from __future__ import annotations

import grp
import pwd
from functools import lru_cache
from typing import Protocol


class IdentityResolver(Protocol):
    def user_name(self, uid: int) -> str | None:
        """Return the login name for ``uid`` or ``None`` when unknown."""

    def group_name(self, gid: int) -> str | None:
        """Return the group name for ``gid`` or ``None`` when unknown."""


@lru_cache(maxsize=256)
def _lookup_user(uid: int) -> str | None:
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return None


@lru_cache(maxsize=256)
def _lookup_group(gid: int) -> str | None:
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError):
        return None


class SystemIdentityResolver:
    """Resolve ids through the passwd and group databases."""

    def user_name(self, uid: int) -> str | None:
        return _lookup_user(uid)

    def group_name(self, gid: int) -> str | None:
        return _lookup_group(gid)


class NumericIdentityResolver:
    """Resolver that never finds a name, forcing numeric ids."""

    def user_name(self, uid: int) -> str | None:
        return None

    def group_name(self, gid: int) -> str | None:
        return None


__all__ = [
    "IdentityResolver",
    "SystemIdentityResolver",
    "NumericIdentityResolver",
]
