"""Renderers that turn a ``SnapshotDocument`` into an output format."""

from __future__ import annotations

from .html import mime_type_for, render_html

__all__ = ["mime_type_for", "render_html"]
