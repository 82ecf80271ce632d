"""Tests for config-file defaults and their sanitization."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from capto import config


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, tmp: str, data: object):
        config_path = Path(tmp) / "config.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        return mock.patch("capto.config.CONFIG_PATH", config_path)

    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("capto.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_policy(), config.SnapshotPolicy())
                self.assertEqual(config.load_default_ignore_patterns(), ())

    def test_policy_overrides_are_applied(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self._with_config(tmp, {"max_lines": 20, "max_line_chars": 80, "control_char_ratio": 0.25}):
                policy = config.load_policy()

        self.assertEqual(policy, config.SnapshotPolicy(max_lines=20, max_line_chars=80, control_char_ratio=0.25))

    def test_invalid_policy_values_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self._with_config(tmp, {"max_lines": True, "max_line_chars": -3, "control_char_ratio": 4}):
                policy = config.load_policy()

        self.assertEqual(policy, config.SnapshotPolicy())

    def test_non_object_config_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self._with_config(tmp, ["not", "a", "dict"]):
                self.assertEqual(config.load_config(), {})

    def test_ignore_patterns_keep_only_strings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self._with_config(tmp, {"ignore": ["*.log", 3, "", "node_modules/"]}):
                self.assertEqual(config.load_default_ignore_patterns(), ("*.log", "node_modules/"))


if __name__ == "__main__":
    unittest.main()
