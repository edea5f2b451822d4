"""Sandboxed file-manager session over one storage root.

``Workspace`` owns one instance of each explicit state record (sort config,
selection, clipboard, search session) and wires them to the listing,
search, transfer and mutation functions. Every component remains usable on
its own; this class only keeps the records consistent after each step and
refuses paths that resolve outside the root.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from .clipboard import (
    EMPTY_CLIPBOARD,
    ClipboardState,
    PasteResult,
    TransferAction,
    paste_transfer,
    stage_transfer,
)
from .config import Settings
from .entry_model import Entry, join_child, list_directory, read_entry
from .errors import OutsideRootError
from .operations import ImportReport, create_directory, delete_entry, delete_many, import_files, rename_entry, validate_name
from .search import SearchResult, SearchScheduler, SearchSession, search_tree
from .selection import (
    EMPTY_SELECTION,
    Selection,
    refresh_selection,
    select_all,
    selected_entries,
    toggle_selection,
)
from .sorting import SortConfig, SortKey, sort_entries

logger = logging.getLogger(__name__)

ROOT_FOLDER_NAME = "Home"


class Workspace:
    """File-manager state bound to a sandboxed storage root."""

    def __init__(self, root: str | os.PathLike[str], settings: Settings | None = None) -> None:
        self.settings = settings or Settings(storage_root=Path(root))
        root_path = os.path.realpath(os.fspath(root))
        os.makedirs(root_path, exist_ok=True)
        self.root = join_child(root_path, "", False)
        self.current_path = self.root
        self.sort_config = SortConfig()
        self.selection: Selection = EMPTY_SELECTION
        self.clipboard: ClipboardState = EMPTY_CLIPBOARD
        self.search_session: SearchSession | None = None
        self.entries: list[Entry] = []
        self._search_scheduler: SearchScheduler | None = None

    # Paths

    def resolve(self, path: str | os.PathLike[str]) -> str:
        """Resolve ``path`` (relative to the current directory) inside the root.

        Returns an absolute path without trailing separator; raises
        ``OutsideRootError`` for anything escaping the root.
        """
        raw = os.fspath(path)
        joined = raw if os.path.isabs(raw) else os.path.join(self.current_path, raw)
        resolved = os.path.realpath(joined)
        root = self.root.rstrip(os.sep) or os.sep
        if resolved != root and not resolved.startswith(self.root):
            raise OutsideRootError(raw, self.root)
        return resolved

    def _check_in_root(self, path: str) -> str:
        """Check that the directory holding ``path`` lies inside the root.

        The final component is not resolved, so a symlink inside the root
        can be renamed or deleted even when it points elsewhere.
        """
        parent = os.path.dirname(path.rstrip(os.sep)) or os.sep
        self.resolve(parent)
        if os.path.basename(path.rstrip(os.sep)) in ("", ".", ".."):
            raise OutsideRootError(path, self.root)
        return path

    def _directory_path(self, path: str | os.PathLike[str]) -> str:
        return join_child(self.resolve(path), "", False)

    @property
    def is_at_root(self) -> bool:
        return self.current_path == self.root

    @property
    def current_folder_name(self) -> str:
        """Display name of the current directory; the root is ``Home``."""
        if self.is_at_root:
            return ROOT_FOLDER_NAME
        return os.path.basename(self.current_path.rstrip(os.sep)) or ROOT_FOLDER_NAME

    # Listing and navigation

    def _list(self, directory: str) -> list[Entry]:
        return list_directory(
            directory,
            reserved_names=self.settings.reserved_names,
            reserved_prefixes=self.settings.reserved_prefixes,
            max_workers=self.settings.listing_workers,
        )

    def refresh(self) -> list[Entry]:
        """Re-list the current directory and recompute the selection size."""
        self.entries = self._list(self.current_path)
        self.selection = refresh_selection(self.selection, self._displayed())
        return self.visible_entries

    def open_directory(self, path: str | os.PathLike[str]) -> list[Entry]:
        """Navigate into ``path``; the current directory is unchanged on failure."""
        directory = self._directory_path(path)
        entries = self._list(directory)
        self.current_path = directory
        logger.debug("Opened directory %s (%d entries)", directory, len(entries))
        self.entries = entries
        self._cancel_background_search()
        self.search_session = None
        self.selection = refresh_selection(self.selection, entries)
        return self.visible_entries

    def go_up(self) -> bool:
        """Move to the parent directory; returns ``False`` at the root."""
        if self.is_at_root:
            return False
        parent = os.path.dirname(self.current_path.rstrip(os.sep))
        self.open_directory(parent)
        return True

    def _displayed(self) -> Sequence[Entry]:
        if self.search_session is not None:
            return self.search_session.results
        return self.entries

    @property
    def visible_entries(self) -> list[Entry]:
        """Search results while searching, else the listing, in sort order."""
        return sort_entries(self._displayed(), self.sort_config)

    def set_sort(self, key: SortKey) -> SortConfig:
        self.sort_config = self.sort_config.toggled(key)
        return self.sort_config

    def details(self, path: str | os.PathLike[str]) -> Entry:
        """Fresh metadata snapshot for one path."""
        resolved = self.resolve(path)
        directory, name = os.path.split(resolved)
        return read_entry(directory, name)

    # Search

    def _run_search(self, query: str) -> SearchResult:
        return search_tree(
            self.root,
            query,
            reserved_names=self.settings.reserved_names,
            reserved_prefixes=self.settings.reserved_prefixes,
        )

    def _apply_search(self, session: SearchSession) -> SearchSession:
        self.search_session = session
        self.selection = refresh_selection(self.selection, session.results)
        return session

    def search(self, query: str) -> SearchSession | None:
        """Search the whole root; a blank query leaves search mode."""
        if not query.strip():
            self.clear_search()
            return None
        self._cancel_background_search()
        return self._apply_search(SearchSession.from_result(query.strip(), self._run_search(query)))

    def schedule_search(self, query: str) -> int | None:
        """Queue a debounced background search and return its request id.

        Results are applied by ``poll_search``. A blank query cancels pending
        work and leaves search mode.
        """
        if not query.strip():
            self.clear_search()
            return None
        if self._search_scheduler is None:
            self._search_scheduler = SearchScheduler(
                self._run_search,
                debounce_seconds=self.settings.search_debounce_seconds,
            )
        return self._search_scheduler.schedule(query)

    def poll_search(self) -> SearchSession | None:
        """Apply the newest finished background search, if one arrived."""
        if self._search_scheduler is None:
            return None
        completions = self._search_scheduler.drain_results()
        latest_id = self._search_scheduler.latest_request_id
        current = [item for item in completions if item.request.request_id == latest_id]
        if not current:
            return None
        return self._apply_search(current[-1].session)

    def _cancel_background_search(self) -> None:
        if self._search_scheduler is not None:
            self._search_scheduler.schedule("")
            self._search_scheduler.drain_results()

    def clear_search(self) -> None:
        self._cancel_background_search()
        self.search_session = None
        self.selection = refresh_selection(self.selection, self.entries)

    # Selection

    def toggle(self, path: str) -> Selection:
        self.selection = toggle_selection(self.selection, path, self._displayed())
        return self.selection

    def select_all(self) -> Selection:
        self.selection = select_all(self._displayed())
        return self.selection

    def clear_selection(self) -> Selection:
        self.selection = EMPTY_SELECTION
        return self.selection

    @property
    def selected_entries(self) -> list[Entry]:
        return selected_entries(self.selection, self.visible_entries)

    # Clipboard

    def stage(self, action: TransferAction, entries: Iterable[Entry] | None = None) -> ClipboardState:
        """Stage ``entries`` (default: the selection) and exit multi-select."""
        items = list(entries) if entries is not None else self.selected_entries
        for entry in items:
            self._check_in_root(entry.path)
        self.clipboard = stage_transfer(items, action)
        self.selection = EMPTY_SELECTION
        return self.clipboard

    def cancel_transfer(self) -> None:
        self.clipboard = EMPTY_CLIPBOARD

    def paste(self) -> PasteResult:
        """Paste the clipboard into the current directory.

        After a failure the clipboard is kept and the caller should
        ``refresh`` to see what was transferred.
        """
        result = paste_transfer(
            self.clipboard,
            self.current_path,
            max_probes=self.settings.max_duplicate_probes,
        )
        self.clipboard = result.clipboard
        if result.refresh_needed:
            self._refresh_view()
        return result

    # Mutations

    def _refresh_view(self) -> None:
        """Re-run an active search, then re-list the current directory."""
        if self.search_session is not None:
            self.search(self.search_session.query)
        self.refresh()

    def _after_mutation(self) -> None:
        self.clear_search()
        self.refresh()

    def create_folder(self, name: str) -> str:
        path = create_directory(os.path.join(self.current_path, validate_name(name)))
        self._after_mutation()
        return path

    def rename(self, entry: Entry, new_name: str) -> str:
        self._check_in_root(entry.path)
        new_path = rename_entry(entry, new_name)
        self._after_mutation()
        return new_path

    def delete(self, entry: Entry) -> None:
        self._check_in_root(entry.path)
        delete_entry(entry.path)
        self._refresh_view()

    def delete_selected(self) -> None:
        """Delete all selected paths; the selection ends up empty either way."""
        paths = [self._check_in_root(path) for path in self.selection.paths]
        try:
            delete_many(paths)
        finally:
            self.selection = EMPTY_SELECTION
            self._refresh_view()

    def import_files(self, sources: Iterable[str | os.PathLike[str]]) -> ImportReport:
        report = import_files(sources, self.current_path)
        self.refresh()
        return report


__all__ = ["ROOT_FOLDER_NAME", "Workspace"]
