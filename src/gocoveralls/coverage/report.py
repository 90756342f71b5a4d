"""SourceFile generation and coverage summaries.

``build_source_files`` is the single pipeline from parsed (and merged)
profiles to the SourceFile records of a job. Files that cannot be located or
read are either skipped with a warning (tolerant, the default) or abort the
run (strict).

Output schema for build_summary:
{
    "summary": {
        "total_files": int,
        "relevant_lines": int,
        "covered_lines": int,
        "line_coverage_percent": float
    },
    "files": [
        {
            "name": str,
            "relevant_lines": int,
            "covered_lines": int,
            "coverage_percent": float,
            "missed_lines": [int, ...]
        },
        ...
    ]
}
"""

from collections.abc import Iterable, Sequence
from typing import Any

from gocoveralls.core.errors import SourceError
from gocoveralls.core.logging import get_logger
from gocoveralls.coverage.ignore import is_ignored
from gocoveralls.coverage.models import Profile, SourceFile
from gocoveralls.coverage.projector import project
from gocoveralls.coverage.resolver import SourceResolver

log = get_logger("coverage.report")


def build_source_files(
    profiles: Iterable[Profile],
    resolver: SourceResolver,
    *,
    strict: bool = False,
    ignore: Sequence[str] = (),
) -> list[SourceFile]:
    """Resolve, read and project every profiled file.

    Args:
        profiles: One Profile per file (merge runs first).
        resolver: Locates and reads source files.
        strict: Raise on a missing/unreadable file instead of skipping it.
        ignore: Glob patterns; matched against both the profile file name and
            the reported name.

    Returns:
        SourceFiles in profile order, ignored and skipped files left out.

    Raises:
        SourceError: In strict mode, for the first file that can't be read.
    """
    source_files: list[SourceFile] = []

    for profile in profiles:
        if is_ignored(profile.file_name, ignore):
            log.debug("source_ignored", file=profile.file_name)
            continue

        try:
            path, content = resolver.read(profile.file_name)
        except SourceError as e:
            if strict:
                raise
            log.warning("source_skipped", file=profile.file_name, error=e.message)
            continue

        name = resolver.display_name(path, profile.file_name)
        if name != profile.file_name and is_ignored(name, ignore):
            log.debug("source_ignored", file=name)
            continue

        source_files.append(project(profile, content, name=name))

    log.info("source_files_built", count=len(source_files))
    return source_files


def compute_file_stats(source_files: Iterable[SourceFile]) -> list[dict[str, Any]]:
    """Compute per-file coverage statistics, sorted by name."""
    file_stats = []

    for sf in sorted(source_files, key=lambda f: f.name):
        relevant = sf.relevant_lines
        covered = sf.covered_lines
        coverage_percent = (covered / relevant * 100.0) if relevant > 0 else 100.0
        file_stats.append(
            {
                "name": sf.name,
                "relevant_lines": relevant,
                "covered_lines": covered,
                "coverage_percent": round(coverage_percent, 2),
                "missed_lines": sf.missed_lines,
            }
        )

    return file_stats


def build_summary(
    source_files: Sequence[SourceFile],
    *,
    include_files: bool = True,
    max_files: int | None = None,
    max_missed_lines: int = 20,
) -> dict[str, Any]:
    """Build a structured coverage summary.

    Args:
        source_files: Projected files of a job.
        include_files: Whether to include per-file details.
        max_files: Limit number of files (lowest coverage first). None = all.
        max_missed_lines: Max missed lines to list per file.

    Returns:
        Structured dict suitable for JSON serialization.
    """
    relevant_lines = sum(sf.relevant_lines for sf in source_files)
    covered_lines = sum(sf.covered_lines for sf in source_files)
    line_coverage_percent = (
        (covered_lines / relevant_lines * 100.0) if relevant_lines > 0 else 100.0
    )

    result: dict[str, Any] = {
        "summary": {
            "total_files": len(source_files),
            "relevant_lines": relevant_lines,
            "covered_lines": covered_lines,
            "line_coverage_percent": round(line_coverage_percent, 2),
        },
    }

    if include_files:
        file_stats = compute_file_stats(source_files)

        # Lowest coverage first to surface problem areas
        file_stats.sort(key=lambda f: f["coverage_percent"])

        if max_files is not None:
            file_stats = file_stats[:max_files]

        for fs in file_stats:
            missed = fs["missed_lines"]
            if len(missed) > max_missed_lines:
                fs["missed_lines"] = missed[:max_missed_lines]
                fs["missed_lines_truncated"] = True

        result["files"] = file_stats

    return result


def build_text_summary(source_files: Sequence[SourceFile]) -> str:
    """One-line coverage summary for display contexts."""
    relevant = sum(sf.relevant_lines for sf in source_files)
    covered = sum(sf.covered_lines for sf in source_files)

    if relevant == 0:
        return "No coverage data"

    percent = covered / relevant * 100.0
    return f"Coverage: {percent:.1f}% ({covered}/{relevant} lines)"
