"""Locating profiled source files on disk.

Profiles name files by Go import path (``example.com/mod/pkg/file.go``),
occasionally by absolute or working-directory-relative path. Resolution
order:

1. Absolute path, as given
2. Path relative to the root directory
3. Go module path from ``<root>/go.mod`` stripped to a root-relative path
4. ``<entry>/src/<name>`` for each GOPATH entry
5. Longest proper suffix of the name that exists under the root
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from gocoveralls.core.errors import SourceError
from gocoveralls.core.logging import get_logger

log = get_logger("coverage.resolver")

_MODULE_RE = re.compile(r"^\s*module\s+\"?([^\s\"]+)\"?", re.MULTILINE)


def read_module_path(root: Path) -> str | None:
    """Module path declared in ``root/go.mod``, if any."""
    go_mod = root / "go.mod"
    try:
        content = go_mod.read_text()
    except (OSError, UnicodeDecodeError):
        return None
    m = _MODULE_RE.search(content)
    return m.group(1) if m else None


def default_gopath() -> list[str]:
    """GOPATH entries from the environment, or ``~/go`` like the go tool."""
    value = os.environ.get("GOPATH", "")
    entries = [p for p in value.split(os.pathsep) if p]
    return entries or [str(Path.home() / "go")]


class SourceResolver:
    """Finds and reads the files named in a profile.

    Args:
        root: Repository root. Reported names are relative to it.
        gopath: GOPATH entries to search. Defaults to ``default_gopath()``.
        module_path: Go module path. Defaults to the one in ``root/go.mod``.
    """

    def __init__(
        self,
        root: Path,
        *,
        gopath: Sequence[str] | None = None,
        module_path: str | None = None,
    ) -> None:
        self._root = root.resolve()
        self._gopath = [Path(p) for p in (gopath if gopath else default_gopath())]
        self._module_path = module_path or read_module_path(self._root)

    def _candidates(self, file_name: str) -> list[Path]:
        name = PurePosixPath(file_name)
        candidates: list[Path] = []

        if Path(file_name).is_absolute():
            candidates.append(Path(file_name))
            return candidates

        candidates.append(self._root / file_name)

        if self._module_path:
            prefix = self._module_path.rstrip("/") + "/"
            if file_name.startswith(prefix):
                candidates.append(self._root / file_name[len(prefix) :])

        candidates.extend(entry / "src" / file_name for entry in self._gopath)

        parts = name.parts
        candidates.extend(self._root.joinpath(*parts[i:]) for i in range(1, len(parts)))
        return candidates

    def locate(self, file_name: str) -> Path:
        """Resolve a profile file name to an existing file.

        Raises:
            SourceError: No candidate path exists.
        """
        for candidate in self._candidates(file_name):
            if candidate.is_file():
                log.debug("source_located", file=file_name, path=str(candidate))
                return candidate
        raise SourceError.not_found(file_name)

    def read(self, file_name: str) -> tuple[Path, bytes]:
        """Locate and read a source file.

        Raises:
            SourceError: File missing or unreadable.
        """
        path = self.locate(file_name)
        try:
            return path, path.read_bytes()
        except OSError as e:
            raise SourceError.unreadable(str(path), str(e)) from e

    def display_name(self, path: Path, file_name: str) -> str:
        """Repo-relative POSIX name of a located file.

        Falls back to the profile's file name for files outside the root
        (e.g. packages under GOPATH).
        """
        try:
            return path.resolve().relative_to(self._root).as_posix()
        except ValueError:
            return file_name
