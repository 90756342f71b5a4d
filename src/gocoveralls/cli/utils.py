"""CLI utilities."""

from pathlib import Path
from typing import Any


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree looking for a .git entry. Outside a
    repository the start path itself is the root.

    Args:
        start_path: Starting directory to search from (default: cwd)

    Returns:
        Path to repository root
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    current = start

    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent

    if (current / ".git").exists():
        return current

    return start


def build_overrides(**sections: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Drop unset (None) CLI values so config files and env vars apply.

    Usage::

        build_overrides(service={"repo_token": None, "endpoint": "x"})
        # {"service": {"endpoint": "x"}}
    """
    overrides: dict[str, dict[str, Any]] = {}
    for section, values in sections.items():
        kept = {key: value for key, value in values.items() if value is not None}
        if kept:
            overrides[section] = kept
    return overrides
