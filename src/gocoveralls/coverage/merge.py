"""Profile merging with additive semantics.

When merging profiles from several runs of the same test suite (repeated or
parallel ``go test`` invocations, one profile per package), hit counts are
combined per block, where a block is identified by its exact start/end
line and column:

- count/atomic: block.count = sum(block.count across runs)
- set:          block.count = 1 if any run hit the block, else 0

Summation is commutative and associative, so the order of runs never changes
a merged count. Merging happens at block level, before projection onto lines.
Merging is not idempotent: a profile merged with itself doubles its counts.
"""

from collections.abc import Iterable
from dataclasses import replace

from gocoveralls.core.errors import ProfileError
from gocoveralls.coverage.models import CoverageBlock, Profile, ProfileMode

Position = tuple[int, int, int, int]


def _combine(mode: ProfileMode, a: int, b: int) -> int:
    if mode is ProfileMode.SET:
        return 1 if a or b else 0
    return a + b


def merge_profiles(runs: Iterable[Iterable[Profile]]) -> list[Profile]:
    """Merge the profiles of several runs into one profile per file.

    Args:
        runs: One iterable of Profiles per run, as returned by parse_profiles.

    Returns:
        Merged Profiles, files in order of first appearance and blocks in
        order of first appearance within their file. No runs yields [].

    Raises:
        ProfileError: The same file appears with different modes.
    """
    modes: dict[str, ProfileMode] = {}
    blocks_by_file: dict[str, dict[Position, CoverageBlock]] = {}

    for run in runs:
        for profile in run:
            mode = modes.setdefault(profile.file_name, profile.mode)
            if mode is not profile.mode:
                raise ProfileError.mode_mismatch(profile.file_name, mode.value, profile.mode.value)

            blocks = blocks_by_file.setdefault(profile.file_name, {})
            for block in profile.blocks:
                existing = blocks.get(block.position)
                if existing is None:
                    if mode is ProfileMode.SET and block.count > 1:
                        block = replace(block, count=1)
                    blocks[block.position] = block
                else:
                    merged = _combine(mode, existing.count, block.count)
                    blocks[block.position] = replace(existing, count=merged)

    return [
        Profile(file_name=file_name, mode=modes[file_name], blocks=list(blocks.values()))
        for file_name, blocks in blocks_by_file.items()
    ]


def merge(*runs: Iterable[Profile]) -> list[Profile]:
    """Convenience function to merge runs as varargs.

    Args:
        *runs: Profile lists to merge.

    Returns:
        Merged Profiles.
    """
    return merge_profiles(runs)
