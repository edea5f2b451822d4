"""Typed failures raised by filedeck operations.

Every error is recoverable at the call site. Nothing is retried or rolled
back: callers re-list afterwards because the filesystem is authoritative.
"""

from __future__ import annotations


class FileDeckError(Exception):
    """Base class for all filedeck failures."""


class NotReadableError(FileDeckError):
    """A directory could not be enumerated (missing, denied, not a directory)."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Could not read directory: {path}")


class AlreadyExistsError(FileDeckError):
    """A create or rename target is already occupied."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"An item with that name already exists: {path}")


class InvalidNameError(FileDeckError):
    """A user supplied name cannot be used as a single path segment."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class OutsideRootError(FileDeckError):
    """A path resolves outside the storage root."""

    def __init__(self, path: str, root: str) -> None:
        self.path = path
        self.root = root
        super().__init__(f"Path {path} is outside storage root {root}")


class IOFailureError(FileDeckError):
    """Generic storage failure during a transfer or delete.

    ``completed`` lists destinations transferred before the failure when the
    error interrupts a paste.
    """

    def __init__(self, path: str, message: str, completed: tuple[str, ...] = ()) -> None:
        self.path = path
        self.completed = completed
        super().__init__(message)


class TooManyDuplicatesError(FileDeckError):
    """Suffix probing for a free destination name was exhausted."""

    def __init__(self, name: str, max_probes: int, completed: tuple[str, ...] = ()) -> None:
        self.name = name
        self.max_probes = max_probes
        self.completed = completed
        super().__init__("Too many duplicates, aborting paste.")


class SelfContainmentError(FileDeckError):
    """A folder would be pasted into itself or one of its descendants."""

    def __init__(self, source: str, destination: str, completed: tuple[str, ...] = ()) -> None:
        self.source = source
        self.destination = destination
        self.completed = completed
        super().__init__("Cannot paste a folder into itself.")


class PartialFailureError(FileDeckError):
    """At least one member of a batch operation failed.

    ``failures`` holds ``(path, error)`` pairs. Which of the other members
    succeeded is not reported; re-list to observe the result.
    """

    def __init__(self, failures: list[tuple[str, Exception]]) -> None:
        self.failures = failures
        super().__init__(f"Failed to delete {len(failures)} item(s).")


__all__ = [
    "FileDeckError",
    "NotReadableError",
    "AlreadyExistsError",
    "InvalidNameError",
    "OutsideRootError",
    "IOFailureError",
    "TooManyDuplicatesError",
    "SelfContainmentError",
    "PartialFailureError",
]
