"""Directory listing with per-child metadata for the entry model."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from ..errors import NotReadableError
from .types import Entry

logger = logging.getLogger(__name__)

DEFAULT_RESERVED_NAMES = frozenset(
    {
        "lost+found",
        "$RECYCLE.BIN",
        "System Volume Information",
        "Thumbs.db",
        "desktop.ini",
    }
)
DEFAULT_RESERVED_PREFIXES = ("~$",)
DEFAULT_LISTING_WORKERS = 8


def is_visible_name(
    name: str,
    reserved_names: Iterable[str] = DEFAULT_RESERVED_NAMES,
    reserved_prefixes: tuple[str, ...] = DEFAULT_RESERVED_PREFIXES,
) -> bool:
    """Return ``False`` for hidden dot-names and reserved bookkeeping names."""
    if name.startswith("."):
        return False
    if name in reserved_names:
        return False
    return not (reserved_prefixes and name.startswith(reserved_prefixes))


def read_entry(directory: str, name: str) -> Entry:
    """Stat ``directory``/``name`` (following symlinks) into an ``Entry``.

    Raises ``OSError`` when the child cannot be stat'ed.
    """
    st = os.stat(os.path.join(directory, name))
    return Entry.build(directory, name, stat.S_ISDIR(st.st_mode), size=st.st_size, mtime=st.st_mtime)


def _read_entry_or_none(directory: str, name: str) -> Entry | None:
    try:
        return read_entry(directory, name)
    except FileNotFoundError:
        logger.debug("Entry vanished while listing: %s", os.path.join(directory, name))
        return None


def list_directory(
    directory: str | os.PathLike[str],
    *,
    reserved_names: Iterable[str] = DEFAULT_RESERVED_NAMES,
    reserved_prefixes: tuple[str, ...] = DEFAULT_RESERVED_PREFIXES,
    max_workers: int = DEFAULT_LISTING_WORKERS,
) -> list[Entry]:
    """List visible direct children of ``directory`` with metadata.

    Child metadata is fetched concurrently and the call returns only once
    every child is done. Children deleted mid-listing are omitted; any other
    failure raises ``NotReadableError`` rather than returning a partial list.
    """
    directory = os.path.abspath(os.fspath(directory))
    reserved = frozenset(reserved_names)
    try:
        names = [
            name
            for name in os.listdir(directory)
            if is_visible_name(name, reserved, reserved_prefixes)
        ]
    except OSError as exc:
        logger.warning("Could not read directory %s: %s", directory, exc)
        raise NotReadableError(directory) from exc

    if not names:
        return []

    workers = max(1, min(max_workers, len(names)))
    try:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="filedeck-stat") as executor:
            results = list(executor.map(lambda name: _read_entry_or_none(directory, name), names))
    except OSError as exc:
        logger.warning("Could not stat children of %s: %s", directory, exc)
        raise NotReadableError(directory) from exc

    return [entry for entry in results if entry is not None]


__all__ = [
    "DEFAULT_LISTING_WORKERS",
    "DEFAULT_RESERVED_NAMES",
    "DEFAULT_RESERVED_PREFIXES",
    "is_visible_name",
    "list_directory",
    "read_entry",
]
