"""Command-line front door for capto.

Parses CLI options, builds the snapshot document for a directory and writes
it out as a single HTML page.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path

from . import __version__
from .config import DEFAULT_FONT_SIZE, DEFAULT_TITLE, SnapshotOptions, load_default_ignore_patterns, load_policy
from .document import FileCounts
from .errors import ConfigurationError
from .render.html import render_html
from .snapshot import build_snapshot

DEFAULT_OUTPUT = "snapshot.html"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def format_counts_summary(counts: FileCounts) -> str:
    return (
        f"Found {counts.total} files "
        f"({counts.text} text, {counts.image} images, {counts.binary} binary)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="capto",
        description="Capture a directory tree and its file contents as one snapshot document.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("directory", help="Directory to capture.")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help=f"Output file (default: {DEFAULT_OUTPUT}).")
    parser.add_argument(
        "-i",
        "--ignore",
        nargs="+",
        default=[],
        metavar="PATTERN",
        help="Additional gitignore-style patterns to exclude.",
    )
    parser.add_argument("-f", "--fontsize", type=_positive_int, default=DEFAULT_FONT_SIZE, help="Base font size.")
    parser.add_argument("-t", "--title", default=DEFAULT_TITLE, help="Document title.")
    parser.add_argument("-r", "--recursive", action="store_true", help="Descend into subdirectories.")
    parser.add_argument("--debug", action="store_true", help="Log debug information.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, build the snapshot and write the HTML output.

    A missing root or an unreadable ``.gitignore`` exits with a message;
    per-file problems only show up as notices inside the output.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format=LOG_FORMAT)

    root = Path(args.directory).resolve()
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    options = SnapshotOptions(
        recursive=args.recursive,
        extra_ignore_patterns=load_default_ignore_patterns() + tuple(args.ignore),
        title=args.title,
        font_size=args.fontsize,
    )
    logging.getLogger(__name__).debug("options: %s", options)

    print("Scanning files...")
    try:
        document = build_snapshot(root, options, policy=load_policy())
    except ConfigurationError as exc:
        raise SystemExit(f"Error: {exc}") from exc
    print(format_counts_summary(document.counts))

    output = Path(args.output)
    output.write_text(render_html(document, generated_at=datetime.now()), encoding="utf-8")
    print(f"   Output: {output}")
