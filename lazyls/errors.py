"""Fatal error taxonomy for listing runs.

Every detected fault aborts the run; the CLI turns these into one
diagnostic line and a non-zero exit status.
"""

from __future__ import annotations


class LsError(Exception):
    """Base class for all listing failures."""


class ResourceError(LsError):
    """Enumeration or metadata resolution failed in the OS layer."""

    def __init__(self, operation: str, path: str, cause: OSError | None = None) -> None:
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {cause.strerror}" if cause is not None and cause.strerror else ""
        super().__init__(f"{operation} error for {path}{detail}")


class CapacityError(LsError):
    """A name, path, or rendered line exceeds its fixed bound."""


class ConsistencyError(LsError):
    """A directory changed between the counting and enumeration passes."""

    def __init__(self, path: str, expected: int, found: int) -> None:
        self.path = path
        self.expected = expected
        self.found = found
        change = "added to" if found > expected else "removed from"
        super().__init__(f"files were {change} directory {path} during traversal")


__all__ = [
    "LsError",
    "ResourceError",
    "CapacityError",
    "ConsistencyError",
]
