"""Extension-based MIME inference and category classification.

Both lookups are deterministic functions of an extension string. Unknown
extensions map to ``*/*`` and ``unknown`` respectively. Extensions missing
from the built-in tables fall through to the Pygments lexer registry, which
identifies source code formats.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

FALLBACK_MIME_TYPE = "*/*"

MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xlsb": "application/vnd.ms-excel.sheet.binary.macroEnabled.12",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "tar": "application/x-tar",
    "gzip": "application/gzip",
    "csv": "text/csv",
    "txt": "text/plain",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
}


class FileCategory(Enum):
    IMAGE = "image"
    PDF = "pdf"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    TEXT = "text"
    ARCHIVE = "archive"
    AUDIO = "audio"
    VIDEO = "video"
    CODE = "code"
    UNKNOWN = "unknown"


CATEGORIES: dict[str, FileCategory] = {
    "jpg": FileCategory.IMAGE,
    "jpeg": FileCategory.IMAGE,
    "png": FileCategory.IMAGE,
    "gif": FileCategory.IMAGE,
    "bmp": FileCategory.IMAGE,
    "webp": FileCategory.IMAGE,
    "pdf": FileCategory.PDF,
    "doc": FileCategory.DOCUMENT,
    "docx": FileCategory.DOCUMENT,
    "xls": FileCategory.SPREADSHEET,
    "xlsx": FileCategory.SPREADSHEET,
    "xlsb": FileCategory.SPREADSHEET,
    "csv": FileCategory.SPREADSHEET,
    "ppt": FileCategory.PRESENTATION,
    "pptx": FileCategory.PRESENTATION,
    "txt": FileCategory.TEXT,
    "zip": FileCategory.ARCHIVE,
    "rar": FileCategory.ARCHIVE,
    "tar": FileCategory.ARCHIVE,
    "gzip": FileCategory.ARCHIVE,
    "mp3": FileCategory.AUDIO,
    "wav": FileCategory.AUDIO,
    "mp4": FileCategory.VIDEO,
    "mov": FileCategory.VIDEO,
    "avi": FileCategory.VIDEO,
}


def _normalize(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def mime_type_for_extension(extension: str) -> str:
    """Return the MIME type for ``extension`` or ``*/*`` when unknown."""
    return MIME_TYPES.get(_normalize(extension), FALLBACK_MIME_TYPE)


@lru_cache(maxsize=512)
def _has_source_lexer(extension: str) -> bool:
    """Whether Pygments registers a lexer for ``*.<extension>`` files."""
    from pygments.lexers import find_lexer_class_for_filename

    return find_lexer_class_for_filename(f"file.{extension}") is not None


def category_for_extension(extension: str) -> FileCategory:
    """Classify ``extension`` into a ``FileCategory``."""
    normalized = _normalize(extension)
    if not normalized:
        return FileCategory.UNKNOWN
    category = CATEGORIES.get(normalized)
    if category is not None:
        return category
    if _has_source_lexer(normalized):
        return FileCategory.CODE
    return FileCategory.UNKNOWN


__all__ = [
    "CATEGORIES",
    "FALLBACK_MIME_TYPE",
    "FileCategory",
    "MIME_TYPES",
    "category_for_extension",
    "mime_type_for_extension",
]
