"""Domain model for entries inside the storage root.

This package contains non-UI entry primitives:
- the immutable ``Entry`` snapshot and its action capabilities
- one-level directory listing with concurrently fetched metadata
- pure formatting, MIME and category helpers over entry metadata
"""

from __future__ import annotations

from .filetypes import FileCategory, category_for_extension, mime_type_for_extension
from .formatting import format_bytes, format_timestamp
from .fs import (
    DEFAULT_LISTING_WORKERS,
    DEFAULT_RESERVED_NAMES,
    DEFAULT_RESERVED_PREFIXES,
    is_visible_name,
    list_directory,
    read_entry,
)
from .types import Entry, EntryAction, extension_for, join_child

__all__ = [
    "Entry",
    "EntryAction",
    "extension_for",
    "join_child",
    "DEFAULT_LISTING_WORKERS",
    "DEFAULT_RESERVED_NAMES",
    "DEFAULT_RESERVED_PREFIXES",
    "is_visible_name",
    "list_directory",
    "read_entry",
    "format_bytes",
    "format_timestamp",
    "FileCategory",
    "category_for_extension",
    "mime_type_for_extension",
]
