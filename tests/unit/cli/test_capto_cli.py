"""CLI argument handling and output tests for ``capto.cli.main``."""

from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from capto import cli


class CliTests(unittest.TestCase):
    def _run(self, argv: list[str], config_dir: str) -> str:
        stdout = io.StringIO()
        with mock.patch("capto.config.CONFIG_PATH", Path(config_dir) / "missing.json"), contextlib.redirect_stdout(stdout):
            cli.main(argv)
        return stdout.getvalue()

    def test_main_writes_html_and_prints_summary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, tempfile.TemporaryDirectory() as out_dir:
            root = Path(tmp)
            (root / "a.txt").write_text("alpha\n", encoding="utf-8")
            (root / "b.log").write_text("skip\n", encoding="utf-8")
            (root / "sub").mkdir()
            (root / "sub" / "c.py").write_text("x = 1\n", encoding="utf-8")
            output = Path(out_dir) / "snap.html"

            printed = self._run([str(root), "-o", str(output), "-r", "-i", "*.log", "-t", "Demo"], out_dir)

            self.assertIn("Found 2 files (2 text, 0 images, 0 binary)", printed)
            self.assertIn(str(output), printed)
            html = output.read_text(encoding="utf-8")
            self.assertIn("<title>Demo</title>", html)
            self.assertIn("/sub/c.py:", html)
            self.assertNotIn("/b.log:", html)

    @unittest.skipIf(os.name == "nt", "POSIX filenames can hold undecodable bytes")
    def test_undecodable_filename_is_written_with_replacement_character(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, tempfile.TemporaryDirectory() as out_dir:
            root = Path(tmp)
            (root / "ok.txt").write_text("fine\n", encoding="utf-8")
            try:
                with open(os.path.join(os.fsencode(tmp), b"bad\xff.txt"), "wb") as handle:
                    handle.write(b"hello\n")
            except OSError:
                self.skipTest("filesystem rejects non-UTF-8 names")
            output = Path(out_dir) / "snap.html"

            printed = self._run([str(root), "-o", str(output)], out_dir)

            self.assertIn("Found 2 files (2 text, 0 images, 0 binary)", printed)
            html = output.read_text(encoding="utf-8")
            self.assertIn("/ok.txt:", html)
            self.assertIn("/bad\ufffd.txt:", html)
            self.assertIn("bad\ufffd.txt", html.split("Directory Structure", 1)[1])

    def test_missing_directory_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as ctx:
                self._run([str(Path(tmp) / "nope")], tmp)

        self.assertIn("Not a directory", str(ctx.exception.code))

    def test_unreadable_gitignore_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, tempfile.TemporaryDirectory() as out_dir:
            root = Path(tmp)
            (root / ".gitignore").mkdir()

            with self.assertRaises(SystemExit) as ctx:
                self._run([str(root), "-o", str(Path(out_dir) / "x.html")], out_dir)

            self.assertIn(".gitignore", str(ctx.exception.code))
            self.assertFalse((Path(out_dir) / "x.html").exists())

    def test_fontsize_must_be_positive(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit), contextlib.redirect_stderr(io.StringIO()):
                self._run([tmp, "-f", "0"], tmp)


if __name__ == "__main__":
    unittest.main()
