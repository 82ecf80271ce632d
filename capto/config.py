"""Snapshot options, policy limits and persistent JSON config helpers.

The config file only supplies defaults (policy limits and extra ignore
patterns). All access is defensive: malformed or missing config falls back
to built-in values.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "capto"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_TITLE = "Directory Snapshot"
DEFAULT_FONT_SIZE = 10
DEFAULT_MAX_LINES = 500
DEFAULT_MAX_LINE_CHARS = 300
DEFAULT_CONTROL_CHAR_RATIO = 0.1


@dataclass(frozen=True)
class SnapshotOptions:
    """Caller-facing build options.

    ``title`` and ``font_size`` are carried through to the renderer untouched.
    """

    recursive: bool = False
    extra_ignore_patterns: tuple[str, ...] = ()
    title: str = DEFAULT_TITLE
    font_size: int = DEFAULT_FONT_SIZE


@dataclass(frozen=True)
class SnapshotPolicy:
    """Truncation and content-screen limits applied while building."""

    max_lines: int = DEFAULT_MAX_LINES
    max_line_chars: int = DEFAULT_MAX_LINE_CHARS
    control_char_ratio: float = DEFAULT_CONTROL_CHAR_RATIO


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _positive_int(value: object, default: int) -> int:
    """Accept strictly positive integers; booleans and other types fall back."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _ratio(value: object, default: float) -> float:
    """Accept numbers in the half-open interval ``(0, 1]``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0 or value > 1:
        return default
    return float(value)


def load_policy() -> SnapshotPolicy:
    """Build a policy from config overrides on top of the defaults."""
    data = load_config()
    return SnapshotPolicy(
        max_lines=_positive_int(data.get("max_lines"), DEFAULT_MAX_LINES),
        max_line_chars=_positive_int(data.get("max_line_chars"), DEFAULT_MAX_LINE_CHARS),
        control_char_ratio=_ratio(data.get("control_char_ratio"), DEFAULT_CONTROL_CHAR_RATIO),
    )


def load_default_ignore_patterns() -> tuple[str, ...]:
    """Return configured ignore patterns; non-string items are dropped."""
    value = load_config().get("ignore")
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item.strip())


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_TITLE",
    "DEFAULT_FONT_SIZE",
    "SnapshotOptions",
    "SnapshotPolicy",
    "load_config",
    "load_policy",
    "load_default_ignore_patterns",
]
