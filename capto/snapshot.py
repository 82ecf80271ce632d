"""One-call snapshot build: ignore rules, scan, then document assembly."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import SnapshotOptions, SnapshotPolicy
from .document import BuildContext, SnapshotDocument, build_snapshot_document
from .file_tree_model.fs import scan_directory
from .ignore import load_ignore_rules

logger = logging.getLogger(__name__)


def build_snapshot(
    root: Path,
    options: SnapshotOptions | None = None,
    policy: SnapshotPolicy | None = None,
) -> SnapshotDocument:
    """Build a snapshot document for ``root``.

    Raises ``ConfigurationError`` when the root ignore file cannot be read;
    every other failure shows up inside the returned document.
    """
    root = root.resolve()
    options = options or SnapshotOptions()
    ignore_rules = load_ignore_rules(root, options.extra_ignore_patterns)
    context = BuildContext(policy=policy or SnapshotPolicy(), logger=logger)

    scan = scan_directory(root, options.recursive, ignore_rules)
    logger.debug("scanned %s: %d files, %d tree rows", root, len(scan.entries), len(scan.tree_lines))
    return build_snapshot_document(
        root,
        scan.entries,
        scan.tree_lines,
        options,
        context=context,
        traversal_errors=scan.errors,
    )


__all__ = ["build_snapshot"]
