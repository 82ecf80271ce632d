"""Filesystem scanning for snapshot roots.

One depth-first walk produces both the flat file list and the tree rows, so
the two always enumerate the same non-ignored entries in the same order.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..errors import TraversalError
from ..ignore import IgnoreRuleSet
from .classify import classify_file
from .types import Entry, FileKind, ScanResult

logger = logging.getLogger(__name__)

BRANCH_MIDDLE = "├── "
BRANCH_LAST = "└── "
PREFIX_MIDDLE = "│   "
PREFIX_LAST = "    "


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child row."""

    name: str
    path: Path
    relative_path: str
    is_dir: bool
    is_symlink: bool = False


def child_sort_key(child: DirectoryChild) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then raw name."""
    return (not child.is_dir, child.name.casefold(), child.name)


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with ``/`` separators."""
    return path.relative_to(root).as_posix()


def list_directory_children(
    directory: Path,
    root: Path,
    ignore_rules: IgnoreRuleSet | None = None,
) -> tuple[list[DirectoryChild], Exception | None]:
    """List non-ignored children of ``directory`` in tree order.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned; ignored children are never returned.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                child_path = Path(child.path)
                try:
                    is_symlink = child.is_symlink()
                    is_dir = child.is_dir()
                except OSError:
                    is_symlink = False
                    is_dir = False
                relative_path = relative_posix(child_path, root)
                if ignore_rules is not None and ignore_rules.is_ignored(relative_path, is_dir=is_dir):
                    continue
                children.append(
                    DirectoryChild(
                        name=child.name,
                        path=child_path,
                        relative_path=relative_path,
                        is_dir=is_dir,
                        is_symlink=is_symlink,
                    )
                )
    except (PermissionError, OSError) as exc:
        return [], exc

    children.sort(key=child_sort_key)
    return children, None


def scan_directory(
    root: Path,
    recursive: bool,
    ignore_rules: IgnoreRuleSet | None = None,
    classify: Callable[[Path], FileKind] = classify_file,
) -> ScanResult:
    """Walk ``root`` and return the file list plus tree rows.

    With ``recursive`` false only the root level is read: its subdirectories
    appear in the tree but are not descended into. A directory that cannot
    be listed leaves an ``Error:`` placeholder row and the walk continues.
    Symlinked directories are listed as directories but never descended into.
    """
    root = root.resolve()
    tree_lines: list[str] = [f"{root.name or root}/"]
    entries: list[Entry] = []
    errors: list[TraversalError] = []

    def walk(directory: Path, prefix: str) -> None:
        children, scan_error = list_directory_children(directory, root, ignore_rules)
        if scan_error is not None:
            reason = str(scan_error)
            logger.warning("cannot list %s: %s", directory, reason)
            tree_lines.append(f"{prefix}Error: {reason}")
            errors.append(TraversalError(directory, reason))
            return

        for idx, child in enumerate(children):
            last = idx == len(children) - 1
            branch = BRANCH_LAST if last else BRANCH_MIDDLE
            suffix = "/" if child.is_dir else ""
            tree_lines.append(f"{prefix}{branch}{child.name}{suffix}")
            if child.is_dir:
                if recursive and not child.is_symlink:
                    walk(child.path, prefix + (PREFIX_LAST if last else PREFIX_MIDDLE))
                continue
            entries.append(
                Entry(
                    path=child.path,
                    relative_path=child.relative_path,
                    kind=classify(child.path),
                )
            )

    walk(root, "")
    return ScanResult(
        entries=tuple(entries),
        tree_lines=tuple(tree_lines),
        errors=tuple(errors),
    )


__all__ = [
    "DirectoryChild",
    "child_sort_key",
    "relative_posix",
    "list_directory_children",
    "scan_directory",
]
