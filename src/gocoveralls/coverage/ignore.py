"""Ignore-pattern filtering of profiled files.

Pattern syntax:
- Standard glob patterns (fnmatch), matched against the POSIX file name
- A pattern without ``/`` also matches the base name, so ``doc.go`` excludes
  ``doc.go`` in every package
- A pattern also matches when it matches any parent directory of the name,
  so ``vendor`` or ``vendor/`` excludes everything below ``vendor``
- ``**/`` prefix matches at any depth
- Negation with ``!`` prefix keeps a name that later patterns would exclude

Patterns are evaluated in order; the first pattern that matches decides.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Sequence
from pathlib import PurePosixPath


def matches_glob(rel_path: str, pattern: str) -> bool:
    """Check if a path matches a glob pattern, with ** support."""
    if fnmatch.fnmatchcase(rel_path, pattern):
        return True
    # Handle **/pattern for any-depth matching
    if pattern.startswith("**/"):
        tail = pattern[3:]
        parts = rel_path.split("/")
        return any(fnmatch.fnmatchcase("/".join(parts[i:]), tail) for i in range(len(parts)))
    return False


def _matches(name: str, pattern: str) -> bool:
    pattern = pattern.rstrip("/")
    if matches_glob(name, pattern):
        return True
    if "/" not in pattern and fnmatch.fnmatchcase(PurePosixPath(name).name, pattern):
        return True
    for parent in PurePosixPath(name).parents:
        if parent != PurePosixPath(".") and matches_glob(parent.as_posix(), pattern):
            return True
    return False


def is_ignored(name: str, patterns: Sequence[str]) -> bool:
    """Return True if ``name`` is excluded by ``patterns``."""
    posix_name = name.replace("\\", "/")
    for pattern in patterns:
        if not pattern:
            continue
        if pattern.startswith("!"):
            if _matches(posix_name, pattern[1:]):
                return False
            continue
        if _matches(posix_name, pattern):
            return True
    return False


def split_patterns(value: str | None) -> list[str]:
    """Split a comma-separated ``--ignore`` value into patterns."""
    if not value:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]
