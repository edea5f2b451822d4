"""Tests for config persistence and settings validation.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from filedeck import config
from filedeck.clipboard import DEFAULT_MAX_DUPLICATE_PROBES
from filedeck.entry_model import DEFAULT_LISTING_WORKERS, DEFAULT_RESERVED_NAMES, DEFAULT_RESERVED_PREFIXES


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("filedeck.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                settings = config.load_settings()

            self.assertEqual(settings, config.Settings())
            self.assertEqual(settings.storage_root, config.DEFAULT_STORAGE_ROOT)
            self.assertEqual(settings.max_duplicate_probes, DEFAULT_MAX_DUPLICATE_PROBES)

    def test_storage_root_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            store = Path(tmp) / "store"
            with mock.patch("filedeck.config.CONFIG_PATH", config_path):
                config.save_storage_root(store)
                self.assertEqual(config.load_storage_root(), store)
                self.assertEqual(config.load_settings().storage_root, store)

    def test_valid_values_are_loaded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("filedeck.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "reserved_names": ["cache", 3, ""],
                        "reserved_prefixes": [],
                        "listing_workers": 2,
                        "max_duplicate_probes": 10,
                        "search_debounce_seconds": 0,
                    }
                )
                settings = config.load_settings()

            self.assertEqual(settings.reserved_names, frozenset({"cache"}))
            self.assertEqual(settings.reserved_prefixes, ())
            self.assertEqual(settings.listing_workers, 2)
            self.assertEqual(settings.max_duplicate_probes, 10)
            self.assertEqual(settings.search_debounce_seconds, 0.0)

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("filedeck.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "storage_root": "   ",
                        "reserved_names": "cache",
                        "listing_workers": True,
                        "max_duplicate_probes": 0,
                        "search_debounce_seconds": -1,
                    }
                )
                settings = config.load_settings()

            self.assertEqual(settings.storage_root, config.DEFAULT_STORAGE_ROOT)
            self.assertEqual(settings.reserved_names, DEFAULT_RESERVED_NAMES)
            self.assertEqual(settings.reserved_prefixes, DEFAULT_RESERVED_PREFIXES)
            self.assertEqual(settings.listing_workers, DEFAULT_LISTING_WORKERS)
            self.assertEqual(settings.max_duplicate_probes, DEFAULT_MAX_DUPLICATE_PROBES)
            self.assertEqual(settings.search_debounce_seconds, 0.5)

    def test_malformed_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("filedeck.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("filedeck.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
