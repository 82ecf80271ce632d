"""Text/image/binary classification for snapshot entries.

Classification looks at the extension first and then at a bounded byte
probe, so the same path and bytes always produce the same kind.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from .types import FileKind

CLASSIFY_PROBE_BYTES = 4_096
BINARY_SUSPICIOUS_RATIO = 0.3

IMAGE_EXTENSIONS = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".bmp",
        ".webp",
        ".svg",
        ".tiff",
        ".tif",
    }
)

_TEXT_BOMS = (
    codecs.BOM_UTF8,
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)
_BINARY_SIGNATURES = (
    b"%PDF-",
    b"PK\x03\x04",
    b"\x1f\x8b",
    b"\x7fELF",
    b"MZ\x90\x00",
    b"\xca\xfe\xba\xbe",
    b"\xcf\xfa\xed\xfe",
    b"SQLite format 3\x00",
)
# C0 controls that commonly appear in text files.
_ALLOWED_CONTROL_BYTES = frozenset(b"\t\n\r\f\b\x1b")


def is_image_path(path: Path) -> bool:
    """Return whether ``path`` has a known raster/vector image extension."""
    return path.suffix.lower() in IMAGE_EXTENSIONS


def looks_binary(sample: bytes) -> bool:
    """Heuristically decide whether ``sample`` is binary content."""
    if not sample:
        return False
    if sample.startswith(_TEXT_BOMS):
        return False
    if b"\x00" in sample:
        return True
    if sample.startswith(_BINARY_SIGNATURES):
        return True

    suspicious = 0
    for byte in sample:
        if byte == 0x7F or (byte < 32 and byte not in _ALLOWED_CONTROL_BYTES):
            suspicious += 1
    return suspicious > BINARY_SUSPICIOUS_RATIO * len(sample)


def read_probe(path: Path, size: int = CLASSIFY_PROBE_BYTES) -> bytes:
    """Read at most ``size`` leading bytes of ``path``."""
    with path.open("rb") as handle:
        return handle.read(size)


def classify_file(path: Path) -> FileKind:
    """Classify a non-directory path as image, binary or text.

    A probe that cannot be read classifies as text; the decoder then reports
    the read failure as a visible notice.
    """
    if is_image_path(path):
        return FileKind.IMAGE
    try:
        sample = read_probe(path)
    except OSError:
        return FileKind.TEXT
    if looks_binary(sample):
        return FileKind.BINARY
    return FileKind.TEXT


__all__ = [
    "CLASSIFY_PROBE_BYTES",
    "BINARY_SUSPICIOUS_RATIO",
    "IMAGE_EXTENSIONS",
    "is_image_path",
    "looks_binary",
    "read_probe",
    "classify_file",
]
