"""Domain datatypes for scanned snapshot entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..errors import TraversalError


class FileKind(str, Enum):
    """Classification of one filesystem entry."""

    DIRECTORY = "directory"
    TEXT = "text"
    IMAGE = "image"
    BINARY = "binary"


@dataclass(frozen=True)
class Entry:
    """One file under the snapshot root.

    ``relative_path`` always uses ``/`` separators.
    """

    path: Path
    relative_path: str
    kind: FileKind


@dataclass(frozen=True)
class ScanResult:
    """Flat file list and tree rows produced by one directory walk."""

    entries: tuple[Entry, ...]
    tree_lines: tuple[str, ...]
    errors: tuple[TraversalError, ...] = ()


__all__ = [
    "FileKind",
    "Entry",
    "ScanResult",
]
