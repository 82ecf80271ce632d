"""Domain model for scanned snapshot trees.

This package contains the filesystem-facing pieces of a snapshot build:
- entry datatypes and the text/image/binary classification
- directory scanning that yields the flat file list and tree rows together
"""

from __future__ import annotations

from .types import Entry, FileKind, ScanResult
from .classify import (
    CLASSIFY_PROBE_BYTES,
    IMAGE_EXTENSIONS,
    classify_file,
    is_image_path,
    looks_binary,
)
from .fs import DirectoryChild, list_directory_children, scan_directory

__all__ = [
    "Entry",
    "FileKind",
    "ScanResult",
    "CLASSIFY_PROBE_BYTES",
    "IMAGE_EXTENSIONS",
    "classify_file",
    "is_image_path",
    "looks_binary",
    "DirectoryChild",
    "list_directory_children",
    "scan_directory",
]
