"""Public package surface for capto.

Exports ``build_snapshot`` for programmatic use and ``main`` for CLI
invocation. Most implementation lives in submodules under ``capto``.
"""

from __future__ import annotations

from .config import SnapshotOptions, SnapshotPolicy
from .document import SnapshotDocument
from .errors import ConfigurationError
from .snapshot import build_snapshot

__version__ = "2.0.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "__version__",
    "SnapshotOptions",
    "SnapshotPolicy",
    "SnapshotDocument",
    "ConfigurationError",
    "build_snapshot",
    "main",
]
