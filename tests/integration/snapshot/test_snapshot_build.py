"""End-to-end snapshot builds over real directory trees."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from capto import ConfigurationError, SnapshotOptions, build_snapshot
from capto.decoding import CONTROL_CHARS_NOTICE
from capto.file_tree_model import FileKind


class SnapshotBuildTests(unittest.TestCase):
    def test_log_pattern_excludes_nested_files_but_keeps_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("a\n", encoding="utf-8")
            (root / "b.log").write_text("b\n", encoding="utf-8")
            (root / "sub").mkdir()
            (root / "sub" / "c.log").write_text("c\n", encoding="utf-8")

            document = build_snapshot(root, SnapshotOptions(recursive=True, extra_ignore_patterns=("*.log",)))

            self.assertEqual([section.entry.relative_path for section in document.sections], ["a.txt"])
            self.assertEqual(document.tree_lines, (f"{root.name}/", "├── sub/", "└── a.txt"))

    def test_git_metadata_is_always_excluded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git" / "objects").mkdir(parents=True)
            (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
            (root / ".gitignore").write_text("!.git\n", encoding="utf-8")
            (root / "main.py").write_text("pass\n", encoding="utf-8")

            document = build_snapshot(root, SnapshotOptions(recursive=True, extra_ignore_patterns=("!.git/",)))

            self.assertEqual(
                [section.entry.relative_path for section in document.sections],
                [".gitignore", "main.py"],
            )
            self.assertFalse(any(".git/" == line.split(" ")[-1] for line in document.tree_lines))

    def test_mixed_tree_counts_and_notices(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "ascii.txt").write_bytes(b"just ascii\nsecond\n")
            (root / "noisy.dat").write_bytes((b"a" * 17 + b"\x01\x02\x03") * 50)
            (root / "photo.jpg").write_bytes(b"\xff\xd8\xff\xe0\x00\x10JFIF")
            (root / "blob.bin").write_bytes(b"\x00" * 64)

            document = build_snapshot(root)
            sections = {section.entry.relative_path: section for section in document.sections}

            self.assertEqual((document.counts.text, document.counts.image, document.counts.binary), (2, 1, 1))
            self.assertEqual([line.text for line in sections["ascii.txt"].lines], ["just ascii", "second"])
            self.assertEqual(sections["ascii.txt"].omitted_lines, 0)
            self.assertEqual(sections["noisy.dat"].notice, CONTROL_CHARS_NOTICE)
            self.assertIs(sections["photo.jpg"].kind, FileKind.IMAGE)
            self.assertIsNotNone(sections["blob.bin"].notice)

    def test_501_line_file_reports_one_omitted_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "long.txt").write_text("".join(f"row {idx}\n" for idx in range(501)), encoding="utf-8")

            section = build_snapshot(root).sections[0]

            self.assertEqual(len(section.lines), 500)
            self.assertEqual(section.omitted_lines, 1)

    def test_repeated_builds_are_identical(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pkg").mkdir()
            (root / "pkg" / "mod.py").write_text("value = 1\n", encoding="utf-8")
            (root / "README.md").write_text("# readme\n", encoding="utf-8")
            options = SnapshotOptions(recursive=True)

            self.assertEqual(build_snapshot(root, options), build_snapshot(root, options))

    def test_unreadable_gitignore_aborts_before_scanning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".gitignore").mkdir()

            with self.assertRaises(ConfigurationError):
                build_snapshot(root)


if __name__ == "__main__":
    unittest.main()
