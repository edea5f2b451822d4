"""Multi-select state and aggregate size tracking.

A ``Selection`` is an immutable record; every operation returns a new one.
Aggregate size is always computed against the currently displayed entries
(directory listing or search results). Selected paths missing from that
list count as zero bytes but stay selected until cleared.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .entry_model import Entry


@dataclass(frozen=True)
class Selection:
    """Ordered unique selected paths plus their cached aggregate size."""

    paths: tuple[str, ...] = ()
    total_size: int = 0
    active: bool = False

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __len__(self) -> int:
        return len(self.paths)


EMPTY_SELECTION = Selection()


def aggregate_size(paths: Iterable[str], visible: Sequence[Entry]) -> int:
    """Sum sizes of ``visible`` entries whose path is in ``paths``."""
    wanted = set(paths)
    return sum(entry.size for entry in visible if entry.path in wanted)


def _with_paths(paths: tuple[str, ...], visible: Sequence[Entry]) -> Selection:
    if not paths:
        return EMPTY_SELECTION
    return Selection(paths=paths, total_size=aggregate_size(paths, visible), active=True)


def toggle_selection(selection: Selection, path: str, visible: Sequence[Entry]) -> Selection:
    """Add ``path`` if absent, remove it if present.

    Removing the last member returns the inactive empty selection.
    """
    if path in selection.paths:
        remaining = tuple(item for item in selection.paths if item != path)
        return _with_paths(remaining, visible)
    return _with_paths(selection.paths + (path,), visible)


def select_all(visible: Sequence[Entry]) -> Selection:
    """Select every visible entry; nothing visible leaves selection inactive."""
    return _with_paths(tuple(dict.fromkeys(entry.path for entry in visible)), visible)


def clear_selection() -> Selection:
    return EMPTY_SELECTION


def refresh_selection(selection: Selection, visible: Sequence[Entry]) -> Selection:
    """Recompute the aggregate size after the displayed list changed."""
    return _with_paths(selection.paths, visible)


def selected_entries(selection: Selection, visible: Sequence[Entry]) -> list[Entry]:
    """Visible entries that are selected, in display order."""
    return [entry for entry in visible if entry.path in selection.paths]


__all__ = [
    "EMPTY_SELECTION",
    "Selection",
    "aggregate_size",
    "clear_selection",
    "refresh_selection",
    "select_all",
    "selected_entries",
    "toggle_selection",
]
