"""Domain datatypes for filesystem entries inside the storage root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp"})


class EntryAction(Enum):
    """User-facing actions whose applicability depends on the entry kind."""

    OPEN = "open"
    SHARE = "share"
    RENAME = "rename"
    DELETE = "delete"
    COPY = "copy"
    MOVE = "move"
    DETAILS = "details"


FILE_ONLY_ACTIONS = frozenset({EntryAction.OPEN, EntryAction.SHARE})


def join_child(directory: str, name: str, is_dir: bool) -> str:
    """Join ``name`` under ``directory``; directory paths end with ``os.sep``."""
    parent = directory if directory.endswith(os.sep) else directory + os.sep
    return parent + name + (os.sep if is_dir else "")


def extension_for(name: str, is_dir: bool) -> str:
    """Lower-cased last dot segment for files, empty otherwise."""
    if is_dir or "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


@dataclass(frozen=True)
class Entry:
    """Immutable snapshot of one file or directory and its metadata."""

    name: str
    path: str
    is_dir: bool
    extension: str = ""
    size: int = 0
    mtime: float = 0.0

    @classmethod
    def build(cls, directory: str, name: str, is_dir: bool, size: int = 0, mtime: float = 0.0) -> Entry:
        """Create an entry whose path and extension are derived from ``directory``/``name``."""
        return cls(
            name=name,
            path=join_child(directory, name, is_dir),
            is_dir=is_dir,
            extension=extension_for(name, is_dir),
            size=0 if is_dir else max(0, int(size)),
            mtime=float(mtime),
        )

    @property
    def fs_path(self) -> Path:
        """The entry path as a ``Path`` (no trailing separator)."""
        return Path(self.path.rstrip(os.sep) or os.sep)

    @property
    def parent(self) -> str:
        """Containing directory path, with trailing separator."""
        return self.path.rstrip(os.sep)[: -len(self.name)]

    @property
    def is_image(self) -> bool:
        return not self.is_dir and self.extension in IMAGE_EXTENSIONS

    def allows(self, action: EntryAction) -> bool:
        """Return whether ``action`` applies to this entry kind.

        Opening and sharing only make sense for files.
        """
        if self.is_dir:
            return action not in FILE_ONLY_ACTIONS
        return True


__all__ = [
    "Entry",
    "EntryAction",
    "FILE_ONLY_ACTIONS",
    "IMAGE_EXTENSIONS",
    "extension_for",
    "join_child",
]
