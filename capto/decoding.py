"""Encoding-aware loading of text entries.

Files are read in one pass, screened again for binary content, decoded with
the charset ``chardet`` detects, and rejected when the decoded text is mostly
control characters. Failures come back as ``DecodedContent.error`` notices.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import chardet

from .config import SnapshotPolicy
from .errors import ContentError
from .file_tree_model.classify import looks_binary

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = "utf-8"
BINARY_NOTICE = "Binary file (content not displayed)"
CONTROL_CHARS_NOTICE = "File contains control characters (content not displayed)"

_BOM = "\ufeff"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0e-\x1f\x7f-\x9f]")


@dataclass(frozen=True)
class DecodedContent:
    """Decoded text of one entry, or the reason it cannot be shown."""

    content: str = ""
    encoding: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the file decoded to displayable content."""
        return self.error is None


def control_char_ratio(text: str) -> float:
    """Return the share of control characters in ``text`` (0 for empty text)."""
    if not text:
        return 0.0
    return len(_CONTROL_RE.findall(text)) / len(text)


def detect_encoding(data: bytes) -> str | None:
    """Return the charset label ``chardet`` reports for ``data``, if any."""
    if not data:
        return None
    detected = chardet.detect(data)
    encoding = detected.get("encoding")
    return encoding or None


def decode_bytes(data: bytes) -> tuple[str, str]:
    """Decode ``data`` with the detected charset, falling back to UTF-8.

    Returns ``(text, encoding_label)``.
    """
    encoding = detect_encoding(data)
    if encoding is not None:
        try:
            return data.decode(encoding), encoding
        except (LookupError, UnicodeDecodeError):
            logger.debug("decoding as %s failed, falling back to %s", encoding, FALLBACK_ENCODING)
    return data.decode(FALLBACK_ENCODING, errors="replace"), FALLBACK_ENCODING


def _decode_entry(path: Path, policy: SnapshotPolicy) -> DecodedContent:
    """Decode ``path`` or raise ``ContentError`` when it must not be shown."""
    data = path.read_bytes()
    if looks_binary(data):
        logger.debug("%s passed the probe but the full content is binary", path)
        raise ContentError(path, BINARY_NOTICE)

    content, encoding = decode_bytes(data)
    if content.startswith(_BOM):
        content = content[1:]
    logger.debug("File: %s, detected encoding: %s", path.name, encoding)

    if control_char_ratio(content) > policy.control_char_ratio:
        return DecodedContent(error=CONTROL_CHARS_NOTICE, encoding=encoding)
    return DecodedContent(content=content, encoding=encoding)


def read_decoded_content(path: Path, policy: SnapshotPolicy | None = None) -> DecodedContent:
    """Read one text entry; never raises for per-file failures."""
    policy = policy or SnapshotPolicy()
    try:
        return _decode_entry(path, policy)
    except ContentError as exc:
        return DecodedContent(error=exc.reason)
    except (OSError, UnicodeError, LookupError) as exc:
        logger.warning("cannot read %s: %s", path, exc)
        return DecodedContent(error=f"Reading error: {exc}")


__all__ = [
    "FALLBACK_ENCODING",
    "BINARY_NOTICE",
    "CONTROL_CHARS_NOTICE",
    "DecodedContent",
    "control_char_ratio",
    "detect_encoding",
    "decode_bytes",
    "read_decoded_content",
]
