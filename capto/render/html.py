"""Render a ``SnapshotDocument`` as one self-contained HTML page.

Text sections are syntax highlighted with Pygments line by line so that the
document's numbering and truncation stay exact. Image bytes are embedded as
base64 data URLs. Converting the page to PDF is left to external tools.
"""

from __future__ import annotations

import base64
import html
import logging
from datetime import datetime
from pathlib import Path

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from ..document import FileSection, SnapshotDocument
from ..file_tree_model.types import FileKind

logger = logging.getLogger(__name__)

DEFAULT_PYGMENTS_STYLE = "default"

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
}


def display_text(text: str) -> str:
    """Replace undecodable filename bytes (lone surrogates) with U+FFFD."""
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


def escape_html(text: str) -> str:
    return html.escape(display_text(text), quote=True)


def mime_type_for(path: Path) -> str:
    """Return the image MIME type for ``path``'s extension."""
    return MIME_TYPES.get(path.suffix.lower(), "application/octet-stream")


def _lexer_for(path: Path, source: str):
    """Pick a Pygments lexer by filename, falling back to plain text."""
    try:
        return get_lexer_for_filename(path.name, source, stripnl=False, ensurenl=True)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=True)


def highlight_lines(path: Path, lines: list[str], formatter: HtmlFormatter) -> list[str]:
    """Return one highlighted HTML fragment per input line.

    Falls back to escaped plain text if the highlighter output does not
    line up with the input.
    """
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    rendered = highlight(source, _lexer_for(path, source), formatter)
    out = rendered.split("\n")
    if out and out[-1] == "":
        out.pop()
    if len(out) != len(lines):
        logger.debug("highlighted %s to %d rows for %d lines; using plain text", path, len(out), len(lines))
        return [escape_html(line) for line in lines]
    return out


def _render_text_section(section: FileSection, formatter: HtmlFormatter) -> str:
    parts: list[str] = []
    if section.encoding:
        parts.append(f'<div class="encoding-info">Encoding: {escape_html(section.encoding)}</div>')
    if section.notice is not None:
        parts.append(f'<p class="binary-notice">{escape_html(section.notice)}</p>')
        return "".join(parts)

    texts = [line.text for line in section.lines]
    highlighted = highlight_lines(section.entry.path, texts, formatter)
    parts.append('<pre class="highlight">')
    for line, fragment in zip(section.lines, highlighted):
        parts.append(
            f'<span class="file-content-line"><span class="line-number">{line.number}</span>{fragment}</span>\n'
        )
    if section.omitted_lines:
        parts.append(f"\n\n... ({section.omitted_lines} more lines)")
    parts.append("</pre>")
    return "".join(parts)


def _render_image_section(section: FileSection) -> str:
    path = section.entry.path
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.warning("cannot embed image %s: %s", path, exc)
        return f'<p class="binary-notice">Failed to load image: {escape_html(str(exc))}</p>'
    data_url = f"data:{mime_type_for(path)};base64,{base64.b64encode(data).decode('ascii')}"
    name = escape_html(path.name)
    return (
        '<div class="image-container">'
        f"<p>Image file: {name}</p>"
        f'<img src="{data_url}" alt="{name}" />'
        "</div>"
    )


def render_file_section(section: FileSection, formatter: HtmlFormatter) -> str:
    """Render one file block including its ``/relative/path:`` header."""
    header = f'<div class="file-path">/{escape_html(section.entry.relative_path)}:</div>'
    if section.kind is FileKind.IMAGE:
        return header + _render_image_section(section)
    if section.kind is FileKind.BINARY:
        notice = section.notice or "Binary file (content not displayed)"
        return header + f'<p class="binary-notice">{escape_html(notice)}</p>'
    return header + _render_text_section(section, formatter)


def _stylesheet(font_size: int, formatter: HtmlFormatter) -> str:
    return f"""
    @page {{ size: A4; margin: 1.5cm; }}
    body {{ font-family: sans-serif; margin: 0; padding: 0; line-height: 1.5; color: #333; }}
    h1 {{ font-size: {font_size + 14}px; text-align: center; border-bottom: 1px solid #ddd; }}
    h2 {{ font-size: {font_size + 8}px; border-left: 5px solid #4a89dc; padding-left: 10px; }}
    pre {{
      font-family: "Courier New", Consolas, monospace;
      background-color: #f9f9f9; border: 1px solid #ddd; border-radius: 3px;
      padding: 10px; font-size: {font_size}px; white-space: pre-wrap; word-wrap: break-word;
    }}
    .file-path {{ font-weight: bold; color: #4a89dc; margin-top: 1.2em; }}
    .directory-tree {{ white-space: pre; font-family: monospace; }}
    .meta-info {{ text-align: center; color: #777; margin-bottom: 2em; }}
    .section {{ margin-bottom: 2em; page-break-before: always; }}
    .cover {{ text-align: center; page-break-after: always; }}
    .stats {{ display: inline-block; text-align: left; padding: 1em; background: #f5f5f5; }}
    .line-number {{ display: inline-block; width: 2.5em; color: #999; text-align: right; margin-right: 0.5em; }}
    .file-content-line {{ display: block; }}
    .binary-notice {{ color: #777; font-style: italic; }}
    .encoding-info {{ font-size: 90%; color: #777; margin-bottom: 5px; }}
    .image-container {{ text-align: center; margin: 1em 0; page-break-inside: avoid; }}
    .image-container img {{ max-width: 100%; max-height: 800px; object-fit: contain; }}
    {formatter.get_style_defs(".highlight")}
    """


def render_html(
    document: SnapshotDocument,
    generated_at: datetime | None = None,
    style: str = DEFAULT_PYGMENTS_STYLE,
) -> str:
    """Render the whole document; output is stable when ``generated_at`` is ``None``."""
    options = document.options
    counts = document.counts
    formatter = HtmlFormatter(style=style, nowrap=True)
    title = escape_html(options.title)

    generated_row = ""
    if generated_at is not None:
        generated_row = f"Generated: {escape_html(generated_at.isoformat(sep=' ', timespec='seconds'))}<br>"
    scan_mode = "Recursive (includes subdirectories)" if options.recursive else "Top level only"
    tree_html = "\n".join(escape_html(line) for line in document.tree_lines)
    sections_html = "".join(render_file_section(section, formatter) for section in document.sections)

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>{title}</title>
  <style>{_stylesheet(options.font_size, formatter)}</style>
</head>
<body>
  <div class="cover">
    <h1>{title}</h1>
    <p class="meta-info">Directory: {escape_html(str(document.root))}<br>{generated_row}</p>
    <div class="stats">
      <table>
        <tr><td>Total files:</td><td>{counts.total}</td></tr>
        <tr><td>Text files:</td><td>{counts.text}</td></tr>
        <tr><td>Image files:</td><td>{counts.image}</td></tr>
        <tr><td>Binary files:</td><td>{counts.binary}</td></tr>
        <tr><td>Scan mode:</td><td>{scan_mode}</td></tr>
      </table>
    </div>
  </div>
  <div class="section">
    <h2>Directory Structure</h2>
    <pre class="directory-tree">{tree_html}</pre>
  </div>
  <div class="section">
    <h2>File Contents</h2>
    {sections_html}
  </div>
</body>
</html>
"""


__all__ = [
    "MIME_TYPES",
    "display_text",
    "escape_html",
    "mime_type_for",
    "highlight_lines",
    "render_file_section",
    "render_html",
]
