"""Command-line front door for filedeck.

Parses CLI options, opens a ``Workspace`` on the storage root, and runs one
file-management command against it. Failures surface as ``SystemExit``
messages.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .clipboard import TransferAction
from .config import load_settings
from .entry_model import Entry, category_for_extension, format_bytes, format_timestamp, mime_type_for_extension
from .errors import FileDeckError, PartialFailureError
from .operations import create_directory
from .sorting import SortConfig, SortDirection, SortKey, configure_collation
from .workspace import Workspace

logger = logging.getLogger(__name__)


def _entry_row(entry: Entry, label: str) -> str:
    """One listing line: kind flag, size, modification time, label."""
    kind = "d" if entry.is_dir else "-"
    size = "-" if entry.is_dir else format_bytes(entry.size)
    return f"{kind} {size:>12}  {format_timestamp(entry.mtime)}  {label}"


def _relative_label(workspace: Workspace, entry: Entry) -> str:
    return entry.path[len(workspace.root):] if entry.path.startswith(workspace.root) else entry.path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filedeck",
        description="Browse and manage files inside a sandboxed storage root.",
    )
    parser.add_argument("--root", default=None, help="Storage root (default: configured root).")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log operations (-vv for debug).")
    commands = parser.add_subparsers(dest="command", required=True)

    ls_parser = commands.add_parser("ls", help="List a directory.")
    ls_parser.add_argument("path", nargs="?", default=".", help="Directory relative to the root.")
    ls_parser.add_argument("--sort", choices=[key.value for key in SortKey], default=SortKey.NAME.value)
    ls_parser.add_argument("--desc", action="store_true", help="Sort descending.")

    search_parser = commands.add_parser("search", help="Search names below the root.")
    search_parser.add_argument("query")

    mkdir_parser = commands.add_parser("mkdir", help="Create a folder.")
    mkdir_parser.add_argument("path", help="Folder path relative to the root.")

    rename_parser = commands.add_parser("rename", help="Rename a file or folder.")
    rename_parser.add_argument("path")
    rename_parser.add_argument("new_name")

    rm_parser = commands.add_parser("rm", help="Delete files or folders.")
    rm_parser.add_argument("paths", nargs="+")

    for name, help_text in (("cp", "Copy entries into a folder."), ("mv", "Move entries into a folder.")):
        transfer_parser = commands.add_parser(name, help=help_text)
        transfer_parser.add_argument("sources", nargs="+")
        transfer_parser.add_argument("destination")

    import_parser = commands.add_parser("import", help="Copy outside files into the root.")
    import_parser.add_argument("files", nargs="+")
    import_parser.add_argument("--into", default=".", help="Destination folder relative to the root.")

    info_parser = commands.add_parser("info", help="Show details for one entry.")
    info_parser.add_argument("path")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _root_path(arg: str) -> str:
    """Map a CLI path (relative to the storage root) onto the workspace."""
    return arg.lstrip("/\\") or "."


def _run(workspace: Workspace, args: argparse.Namespace) -> None:
    out = sys.stdout
    if args.command == "ls":
        workspace.sort_config = SortConfig(
            key=SortKey(args.sort),
            direction=SortDirection.DESCENDING if args.desc else SortDirection.ASCENDING,
        )
        for entry in workspace.open_directory(_root_path(args.path)):
            out.write(_entry_row(entry, entry.name + (os.sep if entry.is_dir else "")) + "\n")
    elif args.command == "search":
        session = workspace.search(args.query)
        if session is None:
            raise SystemExit("Search query cannot be empty.")
        for entry in workspace.visible_entries:
            out.write(_entry_row(entry, _relative_label(workspace, entry)) + "\n")
    elif args.command == "mkdir":
        create_directory(workspace.resolve(_root_path(args.path)))
    elif args.command == "rename":
        workspace.rename(workspace.details(_root_path(args.path)), args.new_name)
    elif args.command == "rm":
        paths = dict.fromkeys(workspace.details(_root_path(path)).path for path in args.paths)
        for path in paths:
            workspace.toggle(path)
        workspace.delete_selected()
    elif args.command in ("cp", "mv"):
        entries = [workspace.details(_root_path(path)) for path in args.sources]
        action = TransferAction.COPY if args.command == "cp" else TransferAction.MOVE
        workspace.stage(action, entries)
        workspace.open_directory(_root_path(args.destination))
        result = workspace.paste()
        for destination in result.transferred:
            out.write(destination[len(workspace.root):] + "\n")
    elif args.command == "import":
        workspace.open_directory(_root_path(args.into))
        report = workspace.import_files(Path(path) for path in args.files)
        for name in report.skipped:
            out.write(f"skipped (already exists): {name}\n")
    elif args.command == "info":
        entry = workspace.details(_root_path(args.path))
        out.write(f"Name: {entry.name}\n")
        out.write(f"Path: {_relative_label(workspace, entry)}\n")
        out.write(f"Type: {'Folder' if entry.is_dir else entry.extension or 'File'}\n")
        if not entry.is_dir:
            out.write(f"Size: {format_bytes(entry.size)}\n")
            out.write(f"MIME: {mime_type_for_extension(entry.extension)}\n")
            out.write(f"Category: {category_for_extension(entry.extension).value}\n")
        out.write(f"Modified: {format_timestamp(entry.mtime)}\n")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one command inside the storage root."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    if not configure_collation():
        logger.debug("System collation unavailable, sorting names by code point")

    settings = load_settings()
    root = Path(args.root).expanduser() if args.root is not None else settings.storage_root
    try:
        workspace = Workspace(root, settings)
        _run(workspace, args)
    except PartialFailureError as exc:
        failed = ", ".join(path for path, _error in exc.failures)
        raise SystemExit(f"{exc} Failed: {failed}") from exc
    except FileNotFoundError as exc:
        raise SystemExit(f"Path not found: {exc.filename}") from exc
    except FileDeckError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
