"""Persistent JSON config helpers.

Stores the storage root location and engine tuning values.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from .clipboard import DEFAULT_MAX_DUPLICATE_PROBES
from .entry_model import DEFAULT_LISTING_WORKERS, DEFAULT_RESERVED_NAMES, DEFAULT_RESERVED_PREFIXES
from .search import DEFAULT_DEBOUNCE_SECONDS

APP_NAME = "filedeck"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STORAGE_ROOT = Path(user_data_dir(APP_NAME, appauthor=False)) / "files"


@dataclass(frozen=True)
class Settings:
    """Validated engine settings."""

    storage_root: Path = DEFAULT_STORAGE_ROOT
    reserved_names: frozenset[str] = DEFAULT_RESERVED_NAMES
    reserved_prefixes: tuple[str, ...] = DEFAULT_RESERVED_PREFIXES
    listing_workers: int = DEFAULT_LISTING_WORKERS
    max_duplicate_probes: int = DEFAULT_MAX_DUPLICATE_PROBES
    search_debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config dir is non-fatal.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers and values below 1 fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _coerce_nonnegative_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return default
    return float(value)


def _coerce_string_list(value: object) -> tuple[str, ...] | None:
    """Return the strings of a JSON list, or ``None`` if it is not a list."""
    if not isinstance(value, list):
        return None
    return tuple(item for item in value if isinstance(item, str) and item)


def load_storage_root() -> Path:
    """Return the configured storage root, expanding ``~``."""
    value = load_config().get("storage_root")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_STORAGE_ROOT
    return Path(value.strip()).expanduser()


def save_storage_root(root: Path) -> None:
    config = load_config()
    config["storage_root"] = str(root)
    save_config(config)


def load_settings() -> Settings:
    """Build ``Settings`` from the config file, defaulting invalid values."""
    data = load_config()
    reserved_names = _coerce_string_list(data.get("reserved_names"))
    reserved_prefixes = _coerce_string_list(data.get("reserved_prefixes"))
    return Settings(
        storage_root=load_storage_root(),
        reserved_names=frozenset(reserved_names) if reserved_names is not None else DEFAULT_RESERVED_NAMES,
        reserved_prefixes=reserved_prefixes if reserved_prefixes is not None else DEFAULT_RESERVED_PREFIXES,
        listing_workers=_coerce_positive_int(data.get("listing_workers"), DEFAULT_LISTING_WORKERS),
        max_duplicate_probes=_coerce_positive_int(data.get("max_duplicate_probes"), DEFAULT_MAX_DUPLICATE_PROBES),
        search_debounce_seconds=_coerce_nonnegative_float(
            data.get("search_debounce_seconds"),
            DEFAULT_DEBOUNCE_SECONDS,
        ),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_STORAGE_ROOT",
    "Settings",
    "load_config",
    "load_settings",
    "load_storage_root",
    "save_config",
    "save_storage_root",
]
