"""Error taxonomy for snapshot builds.

Only ``ConfigurationError`` escapes a build. Traversal and content failures
are captured per entry and surfaced as visible notices in the document.
"""

from __future__ import annotations

from pathlib import Path


class SnapshotError(Exception):
    """Base class for snapshot build failures."""


class ConfigurationError(SnapshotError):
    """Build inputs are unusable (for example an unreadable ``.gitignore``)."""


class TraversalError(SnapshotError):
    """A directory could not be listed during the walk."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ContentError(SnapshotError):
    """A text entry could not be displayed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(reason)
        self.path = path
        self.reason = reason


__all__ = [
    "SnapshotError",
    "ConfigurationError",
    "TraversalError",
    "ContentError",
]
