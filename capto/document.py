"""Renderer-agnostic snapshot document model and its builder.

The builder turns scan output into ordered per-file sections. Text entries
are decoded lazily, one at a time, and truncated by line count and line
width according to the build's ``SnapshotPolicy``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import SnapshotOptions, SnapshotPolicy
from .decoding import BINARY_NOTICE, DecodedContent, read_decoded_content
from .errors import TraversalError
from .file_tree_model.types import Entry, FileKind

LINE_ELLIPSIS = "..."


@dataclass(frozen=True)
class BuildContext:
    """Per-build state handed to the builder instead of module globals."""

    policy: SnapshotPolicy = field(default_factory=SnapshotPolicy)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    read_content: Callable[[Path, SnapshotPolicy], DecodedContent] = read_decoded_content


@dataclass(frozen=True)
class FileCounts:
    """Per-kind file totals, computed once over the full entry list."""

    text: int = 0
    image: int = 0
    binary: int = 0

    @property
    def total(self) -> int:
        """Number of files across all kinds."""
        return self.text + self.image + self.binary


@dataclass(frozen=True)
class RenderedLine:
    """One kept content line; ``truncated`` marks a width-capped line."""

    number: int
    text: str
    truncated: bool = False


@dataclass(frozen=True)
class FileSection:
    """Rendered view of one file entry.

    Image sections hold no lines; renderers load the bytes from
    ``entry.path`` themselves. ``notice`` explains why a text or binary
    entry shows no content.
    """

    entry: Entry
    lines: tuple[RenderedLine, ...] = ()
    omitted_lines: int = 0
    encoding: str | None = None
    notice: str | None = None

    @property
    def kind(self) -> FileKind:
        """Kind of the underlying entry."""
        return self.entry.kind


@dataclass(frozen=True)
class SnapshotDocument:
    """Complete snapshot: options, counts, tree rows and file sections."""

    root: Path
    options: SnapshotOptions
    counts: FileCounts
    tree_lines: tuple[str, ...]
    sections: tuple[FileSection, ...]
    traversal_errors: tuple[TraversalError, ...] = ()


def count_file_kinds(entries: Sequence[Entry]) -> FileCounts:
    """Count text, image and binary entries in one pass."""
    text = image = binary = 0
    for entry in entries:
        if entry.kind is FileKind.TEXT:
            text += 1
        elif entry.kind is FileKind.IMAGE:
            image += 1
        elif entry.kind is FileKind.BINARY:
            binary += 1
    return FileCounts(text=text, image=image, binary=binary)


def split_content_lines(content: str) -> list[str]:
    """Split decoded text on newlines.

    A single trailing newline does not produce an extra empty line and a
    trailing carriage return is dropped from each line.
    """
    if not content:
        return []
    lines = content.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def truncate_line(line: str, max_chars: int) -> tuple[str, bool]:
    """Cap ``line`` at ``max_chars`` characters plus an ellipsis."""
    if len(line) <= max_chars:
        return line, False
    return line[:max_chars] + LINE_ELLIPSIS, True


def build_text_section(entry: Entry, decoded: DecodedContent, policy: SnapshotPolicy) -> FileSection:
    """Apply line-count and line-width truncation to decoded content."""
    if decoded.error is not None:
        return FileSection(entry=entry, encoding=decoded.encoding, notice=decoded.error)

    all_lines = split_content_lines(decoded.content)
    kept = all_lines[: policy.max_lines]
    rendered: list[RenderedLine] = []
    for idx, line in enumerate(kept, start=1):
        text, truncated = truncate_line(line, policy.max_line_chars)
        rendered.append(RenderedLine(number=idx, text=text, truncated=truncated))
    return FileSection(
        entry=entry,
        lines=tuple(rendered),
        omitted_lines=max(0, len(all_lines) - policy.max_lines),
        encoding=decoded.encoding,
    )


def build_file_section(entry: Entry, context: BuildContext) -> FileSection:
    """Build the section for one entry according to its kind."""
    if entry.kind is FileKind.IMAGE:
        return FileSection(entry=entry)
    if entry.kind is FileKind.BINARY:
        return FileSection(entry=entry, notice=BINARY_NOTICE)

    decoded = context.read_content(entry.path, context.policy)
    if decoded.error is not None:
        context.logger.info("%s: %s", entry.relative_path, decoded.error)
    return build_text_section(entry, decoded, context.policy)


def build_snapshot_document(
    root: Path,
    entries: Sequence[Entry],
    tree_lines: Sequence[str],
    options: SnapshotOptions,
    context: BuildContext | None = None,
    traversal_errors: Sequence[TraversalError] = (),
) -> SnapshotDocument:
    """Assemble the document for already-scanned ``entries``.

    Entries are processed in the given order; the builder only reads files.
    """
    if context is None:
        context = BuildContext()

    counts = count_file_kinds(entries)
    sections = tuple(build_file_section(entry, context) for entry in entries)
    return SnapshotDocument(
        root=root,
        options=options,
        counts=counts,
        tree_lines=tuple(tree_lines),
        sections=sections,
        traversal_errors=tuple(traversal_errors),
    )


__all__ = [
    "LINE_ELLIPSIS",
    "BuildContext",
    "FileCounts",
    "RenderedLine",
    "FileSection",
    "SnapshotDocument",
    "count_file_kinds",
    "split_content_lines",
    "truncate_line",
    "build_text_section",
    "build_file_section",
    "build_snapshot_document",
]
