"""Gitignore-style path filtering for snapshot roots.

Rules come from three layers, evaluated in order: the built-in ``.git``
exclusion, the root ``.gitignore`` and caller-supplied patterns. Every rule
is checked for every path and the last match decides, so ``!pattern`` can
re-include something an earlier rule excluded. The built-in exclusion is
protected: no negation re-includes version-control metadata.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"
BUILTIN_PATTERNS = (".git",)

SOURCE_BUILTIN = "builtin"
SOURCE_GITIGNORE = GITIGNORE_FILENAME
SOURCE_EXTRA = "extra"


@dataclass(frozen=True)
class IgnoreRule:
    """One compiled gitignore pattern plus its parsed flags."""

    pattern: str
    negated: bool
    directory_only: bool
    anchored: bool
    source: str
    protected: bool = field(default=False, compare=False)
    spec: pathspec.GitIgnoreSpec | None = field(default=None, repr=False, compare=False)

    def matches(self, candidate: str) -> bool:
        """Return whether the rule body matches a normalized candidate path."""
        return self.spec is not None and self.spec.match_file(candidate)


def compile_rule(line: str, source: str, protected: bool = False) -> IgnoreRule | None:
    """Compile one ignore-file line, or return ``None`` for blanks/comments.

    Matches of a ``protected`` rule cannot be re-included by later negations.
    """
    stripped = line.rstrip("\r\n")
    if not stripped.strip() or stripped.startswith("#"):
        return None

    negated = stripped.startswith("!")
    body = stripped[1:] if negated else stripped
    if not body.strip():
        return None

    trimmed = body.rstrip()
    directory_only = trimmed.endswith("/")
    anchored = "/" in trimmed.rstrip("/")
    return IgnoreRule(
        pattern=stripped,
        negated=negated,
        directory_only=directory_only,
        anchored=anchored,
        source=source,
        protected=protected and not negated,
        spec=pathspec.GitIgnoreSpec.from_lines([body]),
    )


def _normalize_candidate(relative_path: str, is_dir: bool) -> str:
    """Convert a root-relative path into the POSIX form rules match against."""
    candidate = relative_path
    if os.sep != "/":
        candidate = candidate.replace(os.sep, "/")
    candidate = candidate.strip("/")
    if is_dir:
        candidate += "/"
    return candidate


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Ordered, immutable rule list compiled once for a snapshot root."""

    root: Path
    rules: tuple[IgnoreRule, ...] = ()

    def is_ignored(self, relative_path: str, is_dir: bool = False) -> bool:
        """Return whether ``relative_path`` (relative to ``root``) is excluded."""
        candidate = _normalize_candidate(relative_path, is_dir)
        if not candidate or candidate == "/":
            return False

        ignored = False
        protected = False
        for rule in self.rules:
            if rule.matches(candidate):
                ignored = not rule.negated
                protected = protected or rule.protected
        return ignored or protected


def _read_gitignore_lines(root: Path) -> list[str]:
    """Return root ``.gitignore`` lines, ``[]`` when absent.

    Raises ``ConfigurationError`` when the file exists but cannot be read.
    """
    ignore_path = root / GITIGNORE_FILENAME
    if not ignore_path.exists():
        return []
    try:
        text = ignore_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"cannot read {ignore_path}: {exc}") from exc
    return text.splitlines()


def load_ignore_rules(root: Path, extra_patterns: tuple[str, ...] | list[str] = ()) -> IgnoreRuleSet:
    """Compile the layered rule set for ``root``."""
    root = root.resolve()
    layers: list[tuple[str, list[str]]] = [
        (SOURCE_BUILTIN, list(BUILTIN_PATTERNS)),
        (SOURCE_GITIGNORE, _read_gitignore_lines(root)),
        (SOURCE_EXTRA, list(extra_patterns)),
    ]

    rules: list[IgnoreRule] = []
    for source, lines in layers:
        for line in lines:
            rule = compile_rule(line, source, protected=source == SOURCE_BUILTIN)
            if rule is not None:
                rules.append(rule)

    logger.debug("compiled %d ignore rules for %s", len(rules), root)
    return IgnoreRuleSet(root=root, rules=tuple(rules))


__all__ = [
    "GITIGNORE_FILENAME",
    "BUILTIN_PATTERNS",
    "IgnoreRule",
    "IgnoreRuleSet",
    "compile_rule",
    "load_ignore_rules",
]
