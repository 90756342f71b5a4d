"""Projection of block coverage onto source lines.

A block covers every line from its start line to its end line inclusive.
Within one profile, a later block overwrites the count an earlier block left
on a shared line; counts from several runs are summed beforehand by
``merge_profiles``, never here.
"""

from gocoveralls.core.logging import get_logger
from gocoveralls.coverage.models import Profile, SourceFile, source_digest

log = get_logger("coverage.projector")


def count_lines(content: bytes) -> int:
    """Number of coverage entries for content: newlines plus one.

    A file ending in a newline gets a trailing entry for the empty last line,
    and an empty file gets a single entry.
    """
    return content.count(b"\n") + 1


def project(profile: Profile, source: bytes, *, name: str | None = None) -> SourceFile:
    """Build the per-line coverage of one file.

    Args:
        profile: Blocks for the file.
        source: Raw file content.
        name: Reported file name. Defaults to the profile's file name.

    Returns:
        SourceFile whose coverage list has ``count_lines(source)`` entries:
        None for lines outside every block, else the hit count.
    """
    line_count = count_lines(source)
    coverage: list[int | None] = [None] * line_count

    clipped = 0
    for block in profile.blocks:
        first = max(block.start_line, 1)
        last = min(block.end_line, line_count)
        if first > last:
            clipped += 1
            continue
        if block.start_line < 1 or block.end_line > line_count:
            clipped += 1
        for line in range(first, last + 1):
            coverage[line - 1] = block.count

    if clipped:
        log.debug(
            "blocks_clipped",
            file=profile.file_name,
            clipped=clipped,
            line_count=line_count,
        )

    return SourceFile(
        name=name or profile.file_name,
        source=source.decode("utf-8", errors="replace"),
        coverage=coverage,
        source_digest=source_digest(source),
    )
