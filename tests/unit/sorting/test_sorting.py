"""Tests for directory-first, stable entry ordering."""

from __future__ import annotations

import itertools
import locale
import os
import unittest
from unittest import mock

from filedeck.entry_model import Entry
from filedeck.sorting import SortConfig, SortDirection, SortKey, configure_collation, sort_entries

BASE = os.sep + "store"


def _file(name: str, size: int = 0, mtime: float = 0.0) -> Entry:
    return Entry.build(BASE, name, is_dir=False, size=size, mtime=mtime)


def _folder(name: str, mtime: float = 0.0) -> Entry:
    return Entry.build(BASE, name, is_dir=True, mtime=mtime)


ENTRIES = [
    _file("beta.txt", size=300, mtime=30),
    _folder("Zeta", mtime=5),
    _file("alpha.txt", size=100, mtime=20),
    _folder("archive", mtime=50),
    _file("Gamma.md", size=200, mtime=10),
]


class SortEngineTests(unittest.TestCase):
    def test_directories_precede_files_for_every_config(self) -> None:
        for key, direction in itertools.product(SortKey, SortDirection):
            ordered = sort_entries(ENTRIES, SortConfig(key=key, direction=direction))
            kinds = [entry.is_dir for entry in ordered]
            self.assertEqual(kinds, sorted(kinds, reverse=True), msg=f"{key} {direction}")

    def test_name_ascending_is_case_insensitive(self) -> None:
        ordered = sort_entries(ENTRIES, SortConfig(SortKey.NAME))
        self.assertEqual(
            [entry.name for entry in ordered],
            ["archive", "Zeta", "alpha.txt", "beta.txt", "Gamma.md"],
        )

    def test_name_descending_reverses_within_groups(self) -> None:
        ascending = sort_entries(ENTRIES, SortConfig(SortKey.NAME, SortDirection.ASCENDING))
        descending = sort_entries(ascending, SortConfig(SortKey.NAME, SortDirection.DESCENDING))

        asc_dirs = [entry for entry in ascending if entry.is_dir]
        asc_files = [entry for entry in ascending if not entry.is_dir]
        self.assertEqual(descending, asc_dirs[::-1] + asc_files[::-1])

    def test_size_and_date_keys(self) -> None:
        by_size = sort_entries(ENTRIES, SortConfig(SortKey.SIZE, SortDirection.DESCENDING))
        self.assertEqual(
            [entry.name for entry in by_size],
            ["Zeta", "archive", "beta.txt", "Gamma.md", "alpha.txt"],
        )

        by_date = sort_entries(ENTRIES, SortConfig(SortKey.DATE))
        self.assertEqual(
            [entry.name for entry in by_date],
            ["Zeta", "archive", "Gamma.md", "alpha.txt", "beta.txt"],
        )

    def test_ties_keep_input_order_in_both_directions(self) -> None:
        first = _file("one.bin", size=7)
        second = _file("two.bin", size=7)
        third = _file("three.bin", size=7)
        entries = [first, second, third]

        self.assertEqual(sort_entries(entries, SortConfig(SortKey.SIZE)), entries)
        self.assertEqual(
            sort_entries(entries, SortConfig(SortKey.SIZE, SortDirection.DESCENDING)),
            entries,
        )

    def test_lower_case_wins_case_only_ties(self) -> None:
        upper = _file("Note.txt")
        lower = _file("note.txt")
        self.assertEqual(sort_entries([upper, lower]), [lower, upper])

    def test_input_is_not_mutated(self) -> None:
        entries = list(ENTRIES)
        sort_entries(entries, SortConfig(SortKey.DATE, SortDirection.DESCENDING))
        self.assertEqual(entries, ENTRIES)

    def test_toggle_flips_same_key_and_resets_new_key(self) -> None:
        config = SortConfig()
        config = config.toggled(SortKey.NAME)
        self.assertEqual(config, SortConfig(SortKey.NAME, SortDirection.DESCENDING))
        config = config.toggled(SortKey.NAME)
        self.assertEqual(config, SortConfig(SortKey.NAME, SortDirection.ASCENDING))
        config = config.toggled(SortKey.NAME).toggled(SortKey.SIZE)
        self.assertEqual(config, SortConfig(SortKey.SIZE, SortDirection.ASCENDING))


class CollationTests(unittest.TestCase):
    def setUp(self) -> None:
        self._saved = locale.setlocale(locale.LC_COLLATE)

    def tearDown(self) -> None:
        locale.setlocale(locale.LC_COLLATE, self._saved)

    def test_accented_names_follow_locale_collation(self) -> None:
        for name in ("en_US.UTF-8", "en_US.utf8", "en_GB.UTF-8", "de_DE.UTF-8"):
            if configure_collation(name):
                break
        else:
            self.skipTest("no UTF-8 language collation installed")

        entries = [_file("zeta"), _file("\u00e9clair"), _file("fig"), _file("Eagle")]
        ordered = [entry.name for entry in sort_entries(entries)]
        self.assertEqual(ordered, ["Eagle", "\u00e9clair", "fig", "zeta"])

    def test_c_collation_orders_by_code_point(self) -> None:
        self.assertTrue(configure_collation("C"))
        entries = [_file("zeta"), _file("\u00e9clair"), _file("fig")]
        self.assertEqual([entry.name for entry in sort_entries(entries)], ["fig", "zeta", "\u00e9clair"])

    def test_unavailable_locale_is_reported(self) -> None:
        with mock.patch("filedeck.sorting.locale.setlocale", side_effect=locale.Error("unsupported")):
            self.assertFalse(configure_collation("xx_XX.UTF-8"))


if __name__ == "__main__":
    unittest.main()
