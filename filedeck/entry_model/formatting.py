"""Pure display helpers for entry metadata."""

from __future__ import annotations

import math
import time

BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size: int | float, decimals: int = 2) -> str:
    """Format a byte count in base-1024 units with trailing zeros trimmed.

    ``format_bytes(1536) == "1.5 KB"``; zero, negative and non-numeric sizes
    render as ``"0 Bytes"``.
    """
    try:
        value = float(size)
    except (TypeError, ValueError):
        return "0 Bytes"
    if not value > 0 or math.isinf(value):
        return "0 Bytes"
    places = max(0, decimals)
    index = 0
    while value >= 1024 and index < len(BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    scaled = round(value, places)
    text = f"{scaled:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[index]}"


def format_timestamp(timestamp: float) -> str:
    """Render a unix timestamp in local time, e.g. ``19 Oct 2026, 08:21 PM``."""
    return time.strftime("%d %b %Y, %I:%M %p", time.localtime(timestamp))


__all__ = ["BYTE_UNITS", "format_bytes", "format_timestamp"]
