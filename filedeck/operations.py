"""Create, rename, delete and import operations on the storage tree."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass

from .entry_model import Entry, join_child
from .errors import AlreadyExistsError, InvalidNameError, IOFailureError, PartialFailureError

logger = logging.getLogger(__name__)


def validate_name(name: str) -> str:
    """Return ``name`` trimmed, or raise ``InvalidNameError``.

    A valid name is a single non-empty path segment.
    """
    trimmed = name.strip()
    if not trimmed:
        raise InvalidNameError(name, "name cannot be empty")
    if trimmed in (".", ".."):
        raise InvalidNameError(name, "reserved name")
    separators = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
    if any(sep in trimmed for sep in separators):
        raise InvalidNameError(name, "name cannot contain a path separator")
    if "\x00" in trimmed:
        raise InvalidNameError(name, "name cannot contain NUL")
    return trimmed


def _exists(path: str) -> bool:
    return os.path.lexists(path.rstrip(os.sep) or os.sep)


def create_directory(path: str) -> str:
    """Create directory ``path`` including missing parents.

    Raises ``AlreadyExistsError`` if anything already occupies ``path``.
    Returns the new directory path with a trailing separator.
    """
    target = os.path.abspath(path)
    if _exists(target):
        raise AlreadyExistsError(target)
    try:
        os.makedirs(target)
    except FileExistsError as exc:
        raise AlreadyExistsError(target) from exc
    except OSError as exc:
        logger.exception("Failed to create directory %s", target)
        raise IOFailureError(target, f"Failed to create folder: {exc}") from exc
    logger.info("Created directory %s", target)
    return join_child(target, "", False)


def rename_entry(entry: Entry, new_name: str) -> str:
    """Rename ``entry`` within its parent directory and return the new path.

    Raises ``AlreadyExistsError`` if the sibling name is taken.
    """
    name = validate_name(new_name)
    new_path = join_child(entry.parent, name, entry.is_dir)
    if _exists(new_path):
        raise AlreadyExistsError(new_path)
    try:
        os.rename(entry.fs_path, new_path.rstrip(os.sep))
    except OSError as exc:
        logger.exception("Failed to rename %s to %s", entry.path, new_path)
        raise IOFailureError(entry.path, f"Failed to rename {entry.name}: {exc}") from exc
    logger.info("Renamed %s -> %s", entry.path, new_path)
    return new_path


def delete_entry(path: str) -> None:
    """Delete ``path`` (recursively for directories).

    Deleting a path that does not exist succeeds.
    """
    target = path.rstrip(os.sep) or os.sep
    try:
        if os.path.isdir(target) and not os.path.islink(target):
            shutil.rmtree(target)
        else:
            os.remove(target)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.exception("Failed to delete %s", target)
        raise IOFailureError(path, f"Failed to delete item: {exc}") from exc
    logger.info("Deleted %s", target)


def delete_many(paths: Iterable[str]) -> None:
    """Delete every path, attempting all of them even after failures.

    Raises ``PartialFailureError`` naming each failed path.
    """
    failures: list[tuple[str, Exception]] = []
    for path in paths:
        try:
            delete_entry(path)
        except IOFailureError as exc:
            failures.append((path, exc))
    if failures:
        raise PartialFailureError(failures)


@dataclass(frozen=True)
class ImportReport:
    """Files copied in by ``import_files`` and names skipped as existing."""

    imported: tuple[str, ...]
    skipped: tuple[str, ...]


def import_files(sources: Iterable[str | os.PathLike[str]], destination_dir: str) -> ImportReport:
    """Copy external files into ``destination_dir`` without overwriting.

    A source whose name already exists in the destination is skipped and
    reported; copy failures raise ``IOFailureError``.
    """
    imported: list[str] = []
    skipped: list[str] = []
    for source in sources:
        source_path = os.fspath(source)
        name = os.path.basename(source_path.rstrip(os.sep))
        destination = join_child(os.path.abspath(destination_dir), name, False)
        if _exists(destination):
            skipped.append(name)
            continue
        try:
            shutil.copy2(source_path, destination)
        except OSError as exc:
            logger.exception("Failed to import %s", source_path)
            raise IOFailureError(source_path, f"Failed to import {name}: {exc}") from exc
        logger.info("Imported %s -> %s", source_path, destination)
        imported.append(destination)
    return ImportReport(imported=tuple(imported), skipped=tuple(skipped))


__all__ = [
    "ImportReport",
    "create_directory",
    "delete_entry",
    "delete_many",
    "import_files",
    "rename_entry",
    "validate_name",
]
