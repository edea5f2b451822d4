"""Depth-first, case-insensitive name search below a root directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass

from ..entry_model import DEFAULT_RESERVED_NAMES, DEFAULT_RESERVED_PREFIXES, Entry, is_visible_name, read_entry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Matches in traversal order plus the number of unreadable directories."""

    entries: tuple[Entry, ...]
    skipped_directories: int = 0


def normalize_query(query: str) -> str:
    """Strip ``query``; an empty query is rejected with ``ValueError``."""
    stripped = query.strip()
    if not stripped:
        raise ValueError("search query must not be empty")
    return stripped


def search_tree(
    root: str | os.PathLike[str],
    query: str,
    *,
    reserved_names: Iterable[str] = DEFAULT_RESERVED_NAMES,
    reserved_prefixes: tuple[str, ...] = DEFAULT_RESERVED_PREFIXES,
) -> SearchResult:
    """Return entries below ``root`` whose name contains ``query``.

    Matching ignores case. A directory's own match precedes the matches of
    its descendants. Directories that cannot be read are skipped and
    counted; the search itself never fails because of them. Symlinked
    directories are reported but not descended into.
    """
    needle = normalize_query(query).casefold()
    reserved = frozenset(reserved_names)
    matches: list[Entry] = []
    skipped = 0

    def visit(directory: str) -> None:
        nonlocal skipped
        try:
            names = sorted(os.listdir(directory))
        except OSError as exc:
            skipped += 1
            logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            return

        for name in names:
            if not is_visible_name(name, reserved, reserved_prefixes):
                continue
            try:
                entry = read_entry(directory, name)
            except OSError as exc:
                logger.debug("Skipping unreadable entry %s: %s", os.path.join(directory, name), exc)
                continue
            if needle in name.casefold():
                matches.append(entry)
            if entry.is_dir and not os.path.islink(entry.fs_path):
                visit(entry.path)

    visit(os.path.abspath(os.fspath(root)))
    return SearchResult(entries=tuple(matches), skipped_directories=skipped)


__all__ = ["SearchResult", "normalize_query", "search_tree"]
