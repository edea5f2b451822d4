"""Clipboard-style staged copy/move of entries into a destination directory.

Pasting walks the staged entries one at a time, in the order they were
staged, because each collision-free destination name depends on what the
earlier entries already created. The first failure stops the paste;
entries transferred before it are left in place.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from .entry_model import Entry, join_child
from .errors import IOFailureError, SelfContainmentError, TooManyDuplicatesError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DUPLICATE_PROBES = 50

_DUPLICATE_SUFFIX_RE = re.compile(r"\(\d+\)$")


class TransferAction(Enum):
    COPY = "copy"
    MOVE = "move"


@dataclass(frozen=True)
class ClipboardState:
    """Entries staged for transfer and the pending action."""

    items: tuple[Entry, ...] = ()
    action: TransferAction | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items or self.action is None


EMPTY_CLIPBOARD = ClipboardState()


@dataclass(frozen=True)
class PasteResult:
    """Outcome of a successful paste."""

    transferred: tuple[str, ...]
    clipboard: ClipboardState
    refresh_needed: bool


def stage_transfer(entries: Iterable[Entry], action: TransferAction) -> ClipboardState:
    """Return a clipboard holding ``entries`` for ``action``.

    The result replaces whatever was staged before.
    """
    return ClipboardState(items=tuple(entries), action=action)


def cancel_transfer() -> ClipboardState:
    return EMPTY_CLIPBOARD


def split_name(entry: Entry) -> tuple[str, str]:
    """Split into base name and extension suffix (``".txt"`` or ``""``)."""
    if entry.is_dir or "." not in entry.name:
        return entry.name, ""
    stem, _, extension = entry.name.rpartition(".")
    if not stem:
        return entry.name, ""
    return stem, "." + extension


def candidate_names(entry: Entry, max_probes: int = DEFAULT_MAX_DUPLICATE_PROBES) -> list[str]:
    """Names probed for ``entry``: ``base``, ``base(1)``, ... ``base(max_probes)``.

    Any existing ``(<digits>)`` decoration is stripped from the base first.
    """
    stem, extension = split_name(entry)
    base = _DUPLICATE_SUFFIX_RE.sub("", stem) or stem
    return [base + (f"({index})" if index else "") + extension for index in range(max_probes + 1)]


def resolve_destination(
    entry: Entry,
    destination_dir: str,
    max_probes: int = DEFAULT_MAX_DUPLICATE_PROBES,
    exists: Callable[[str], bool] = os.path.lexists,
) -> str:
    """Return the first unused destination path for ``entry``.

    Raises ``TooManyDuplicatesError`` when every candidate is taken.
    """
    for name in candidate_names(entry, max_probes):
        candidate = join_child(destination_dir, name, entry.is_dir)
        if not exists(candidate.rstrip(os.sep)):
            return candidate
    raise TooManyDuplicatesError(entry.name, max_probes)


def is_within(directory: str, candidate: str) -> bool:
    """Whether ``candidate`` is ``directory`` itself or lies below it."""
    base = os.path.realpath(directory.rstrip(os.sep) or os.sep)
    target = os.path.realpath(candidate.rstrip(os.sep) or os.sep)
    return target == base or target.startswith(base.rstrip(os.sep) + os.sep)


def _would_contain_itself(entry: Entry, destination_dir: str, action: TransferAction) -> bool:
    """Moving a symlink relocates only the link; copying one copies its target."""
    if not entry.is_dir:
        return False
    if action == TransferAction.MOVE and os.path.islink(entry.fs_path):
        return False
    return is_within(entry.path, destination_dir)


def transfer_entry(entry: Entry, destination: str, action: TransferAction) -> None:
    """Copy or move one entry to ``destination``; raises ``OSError`` on failure."""
    source = str(entry.fs_path)
    target = destination.rstrip(os.sep)
    if action == TransferAction.COPY:
        if entry.is_dir:
            shutil.copytree(source, target, symlinks=True)
        else:
            shutil.copy2(source, target)
    else:
        shutil.move(source, target)


def paste_transfer(
    clipboard: ClipboardState,
    destination_dir: str,
    max_probes: int = DEFAULT_MAX_DUPLICATE_PROBES,
) -> PasteResult:
    """Transfer every staged entry into ``destination_dir``.

    On success the returned clipboard is empty and ``refresh_needed`` is set.
    On failure the raised error's ``completed`` lists what was already
    transferred; nothing is undone.
    """
    action = clipboard.action
    if action is None or not clipboard.items:
        return PasteResult(transferred=(), clipboard=clipboard, refresh_needed=False)

    destination_dir = join_child(os.path.abspath(destination_dir), "", False)
    completed: list[str] = []
    for entry in clipboard.items:
        try:
            destination = resolve_destination(entry, destination_dir, max_probes)
        except TooManyDuplicatesError as exc:
            logger.warning("Aborting paste, no free name for %s in %s", entry.name, destination_dir)
            raise TooManyDuplicatesError(exc.name, exc.max_probes, tuple(completed)) from None

        if _would_contain_itself(entry, destination_dir, action):
            logger.warning("Refusing to %s %s into itself (%s)", action.value, entry.path, destination_dir)
            raise SelfContainmentError(entry.path, destination_dir, tuple(completed))

        try:
            logger.info("%s %s -> %s", action.value.capitalize(), entry.path, destination)
            transfer_entry(entry, destination, action)
        except OSError as exc:
            logger.exception("Failed to %s %s", action.value, entry.path)
            raise IOFailureError(
                entry.path,
                f"Failed to {action.value} {entry.name}: {exc}",
                tuple(completed),
            ) from exc
        completed.append(destination)

    return PasteResult(transferred=tuple(completed), clipboard=EMPTY_CLIPBOARD, refresh_needed=True)


__all__ = [
    "ClipboardState",
    "DEFAULT_MAX_DUPLICATE_PROBES",
    "EMPTY_CLIPBOARD",
    "PasteResult",
    "TransferAction",
    "cancel_transfer",
    "candidate_names",
    "is_within",
    "paste_transfer",
    "resolve_destination",
    "split_name",
    "stage_transfer",
    "transfer_entry",
]
