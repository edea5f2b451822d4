"""Tests for one-level directory listing and entry metadata."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from filedeck.entry_model import Entry, list_directory, read_entry
from filedeck.errors import NotReadableError


class ListDirectoryTests(unittest.TestCase):
    def test_lists_direct_children_with_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "docs").mkdir()
            (root / "docs" / "nested.txt").write_text("nested\n", encoding="utf-8")
            (root / "Report.PDF").write_bytes(b"x" * 42)
            (root / "README").write_text("readme", encoding="utf-8")

            entries = {entry.name: entry for entry in list_directory(root)}

            self.assertEqual(set(entries), {"docs", "Report.PDF", "README"})
            docs = entries["docs"]
            self.assertTrue(docs.is_dir)
            self.assertEqual(docs.size, 0)
            self.assertEqual(docs.extension, "")
            self.assertEqual(docs.path, str(root) + os.sep + "docs" + os.sep)

            report = entries["Report.PDF"]
            self.assertFalse(report.is_dir)
            self.assertEqual(report.size, 42)
            self.assertEqual(report.extension, "pdf")
            self.assertEqual(report.path, str(root) + os.sep + "Report.PDF")
            self.assertGreater(report.mtime, 0)

            self.assertEqual(entries["README"].extension, "")

    def test_excludes_hidden_and_reserved_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".hidden").write_text("h", encoding="utf-8")
            (root / "Thumbs.db").write_text("t", encoding="utf-8")
            (root / "~$lock.docx").write_text("l", encoding="utf-8")
            (root / "cache-store").mkdir()
            (root / "visible.txt").write_text("v", encoding="utf-8")

            names = sorted(entry.name for entry in list_directory(root))
            self.assertEqual(names, ["cache-store", "visible.txt"])

            names = sorted(
                entry.name
                for entry in list_directory(root, reserved_names={"cache-store"}, reserved_prefixes=())
            )
            self.assertEqual(names, ["Thumbs.db", "visible.txt", "~$lock.docx"])

    def test_missing_directory_is_not_readable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(NotReadableError) as ctx:
                list_directory(missing)
            self.assertEqual(ctx.exception.path, os.path.abspath(missing))

    def test_file_path_is_not_readable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(NotReadableError):
                list_directory(target)

    def test_permission_denied_is_not_readable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("filedeck.entry_model.fs.os.listdir", side_effect=PermissionError("denied")):
                with self.assertRaises(NotReadableError):
                    list_directory(tmp)

    def test_child_stat_failure_fails_whole_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / "b.txt").write_text("b", encoding="utf-8")

            real_stat = os.stat

            def flaky_stat(path, *args, **kwargs):
                if str(path).endswith("b.txt"):
                    raise PermissionError("denied")
                return real_stat(path, *args, **kwargs)

            with mock.patch("filedeck.entry_model.fs.os.stat", side_effect=flaky_stat):
                with self.assertRaises(NotReadableError):
                    list_directory(root)

    def test_child_deleted_mid_listing_is_omitted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "kept.txt").write_text("k", encoding="utf-8")
            (root / "gone.txt").write_text("g", encoding="utf-8")

            real_stat = os.stat

            def racing_stat(path, *args, **kwargs):
                if str(path).endswith("gone.txt"):
                    raise FileNotFoundError(path)
                return real_stat(path, *args, **kwargs)

            with mock.patch("filedeck.entry_model.fs.os.stat", side_effect=racing_stat):
                entries = list_directory(root, max_workers=1)

            self.assertEqual([entry.name for entry in entries], ["kept.txt"])

    def test_empty_directory_lists_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(list_directory(tmp), [])

    def test_many_children_are_all_returned(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for index in range(40):
                (root / f"file{index}.log").write_text(str(index), encoding="utf-8")

            entries = list_directory(root, max_workers=4)

            self.assertEqual(len(entries), 40)
            self.assertTrue(all(isinstance(entry, Entry) for entry in entries))


class ReadEntryTests(unittest.TestCase):
    def test_kind_comes_from_a_single_stat(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "folder").mkdir()
            (root / "link").symlink_to(root / "folder")
            (root / "plain.txt").write_text("p", encoding="utf-8")

            for name, expect_dir in (("folder", True), ("link", True), ("plain.txt", False)):
                with mock.patch("filedeck.entry_model.fs.os.stat", wraps=os.stat) as stat_mock:
                    entry = read_entry(str(root), name)
                stat_mock.assert_called_once()
                self.assertEqual(entry.is_dir, expect_dir, msg=name)
                self.assertEqual(entry.path.endswith(os.sep), expect_dir, msg=name)


if __name__ == "__main__":
    unittest.main()
