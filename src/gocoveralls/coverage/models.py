"""Coverage data model.

Block-level profile data as written by ``go test -coverprofile`` and the
line-level SourceFile records built from it. Profiles are consumed once per
run: parsed, optionally merged, projected onto source lines and discarded.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ProfileMode(StrEnum):
    """Value of the ``mode:`` header line.

    set: block executed or not (0/1); count: hit count;
    atomic: hit count collected with atomic increments.
    """

    SET = "set"
    COUNT = "count"
    ATOMIC = "atomic"


@dataclass(frozen=True, slots=True)
class CoverageBlock:
    """A contiguous source range treated as one coverage unit.

    Lines and columns are 1-based, as in the profile text.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def position(self) -> tuple[int, int, int, int]:
        """Identity of the block across runs of the same file."""
        return (self.start_line, self.start_col, self.end_line, self.end_col)


@dataclass(slots=True)
class Profile:
    """Coverage blocks for a single file, in profile order."""

    file_name: str
    mode: ProfileMode
    blocks: list[CoverageBlock] = field(default_factory=list)


@dataclass(slots=True)
class SourceFile:
    """A source file and its per-line coverage for one job.

    ``coverage[i]`` describes line ``i + 1``: None when no block touches the
    line, otherwise the hit count (0 = not covered).
    """

    name: str  # repo-relative path
    source: str
    coverage: list[int | None]
    source_digest: str = ""

    @property
    def relevant_lines(self) -> int:
        """Number of instrumented lines."""
        return sum(1 for hits in self.coverage if hits is not None)

    @property
    def covered_lines(self) -> int:
        return sum(1 for hits in self.coverage if hits)

    @property
    def missed_lines(self) -> list[int]:
        """1-based line numbers with zero hits."""
        return [i + 1 for i, hits in enumerate(self.coverage) if hits == 0]

    def to_payload(self, *, include_source: bool = True) -> dict[str, Any]:
        """Serialize for the jobs API ``source_files`` entry."""
        payload: dict[str, Any] = {"name": self.name}
        if include_source:
            payload["source"] = self.source
        payload["source_digest"] = self.source_digest
        payload["coverage"] = list(self.coverage)
        return payload


def source_digest(content: bytes) -> str:
    """MD5 hex digest of raw source bytes, as the jobs API expects."""
    return hashlib.md5(content).hexdigest()  # noqa: S324
