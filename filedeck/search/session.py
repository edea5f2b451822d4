"""Ephemeral search-mode state."""

from __future__ import annotations

from dataclasses import dataclass

from ..entry_model import Entry
from .tree import SearchResult


@dataclass(frozen=True)
class SearchSession:
    """A query plus the results gathered for it.

    A session only exists while search mode is active; clearing the query
    discards it instead of searching for the empty string.
    """

    query: str
    results: tuple[Entry, ...] = ()
    skipped_directories: int = 0

    @classmethod
    def from_result(cls, query: str, result: SearchResult) -> SearchSession:
        return cls(query=query, results=result.entries, skipped_directories=result.skipped_directories)


__all__ = ["SearchSession"]
