"""Display ordering for entry lists.

Directories always precede files. Within each group entries are compared by
the configured key, and only that comparison is reversed for descending
order. Sorting is stable and never mutates its input.
"""

from __future__ import annotations

import locale
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from .entry_model import Entry


class SortKey(Enum):
    NAME = "name"
    SIZE = "size"
    DATE = "date"


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class SortConfig:
    """Active sort key and direction."""

    key: SortKey = SortKey.NAME
    direction: SortDirection = SortDirection.ASCENDING

    def toggled(self, key: SortKey) -> SortConfig:
        """Flip direction when re-choosing ``key``; a new key starts ascending."""
        if key == self.key and self.direction == SortDirection.ASCENDING:
            return SortConfig(key=key, direction=SortDirection.DESCENDING)
        return SortConfig(key=key, direction=SortDirection.ASCENDING)


def configure_collation(name: str = "") -> bool:
    """Adopt the user's collation rules for name ordering.

    Python starts with the ``C`` collation, which orders by code point, so
    ``name_sort_key`` only becomes locale-aware once ``LC_COLLATE`` is set.
    The CLI calls this at startup; library callers set the locale themselves
    or call this. Returns ``False`` if the locale is unavailable.
    """
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        return False
    return True


def name_sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive key under the current ``LC_COLLATE``; lower-case wins exact-fold ties."""
    return (locale.strxfrm(name.casefold()), name.swapcase())


_KEY_FUNCTIONS: dict[SortKey, Callable[[Entry], object]] = {
    SortKey.NAME: lambda entry: name_sort_key(entry.name),
    SortKey.SIZE: lambda entry: entry.size,
    SortKey.DATE: lambda entry: entry.mtime,
}


def sort_entries(entries: Iterable[Entry], config: SortConfig = SortConfig()) -> list[Entry]:
    """Return a new list ordered by ``config`` with directories first."""
    key = _KEY_FUNCTIONS[config.key]
    reverse = config.direction == SortDirection.DESCENDING
    directories: list[Entry] = []
    files: list[Entry] = []
    for entry in entries:
        (directories if entry.is_dir else files).append(entry)
    return sorted(directories, key=key, reverse=reverse) + sorted(files, key=key, reverse=reverse)


__all__ = [
    "SortConfig",
    "SortDirection",
    "SortKey",
    "configure_collation",
    "name_sort_key",
    "sort_entries",
]
