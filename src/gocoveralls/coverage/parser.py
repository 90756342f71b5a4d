"""Go coverage profile parser.

go test -coverprofile writes profiles with format:
mode: set|count|atomic
<package>/<file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:
mode: set
github.com/user/pkg/main.go:10.2,12.16 3 1
github.com/user/pkg/main.go:15.2,20.16 5 0

- mode: set (0/1), count (hit count), atomic (thread-safe count)
- numstmt: number of statements in block
- count: execution count (0 = not covered)

Any malformed line aborts the parse: a truncated or corrupt profile is not
trusted in part.
"""

import re
from pathlib import Path

from gocoveralls.core.errors import ProfileError
from gocoveralls.core.logging import get_logger
from gocoveralls.coverage.models import CoverageBlock, Profile, ProfileMode

log = get_logger("coverage.parser")

_MODE_PREFIX = "mode: "

_BLOCK_RE = re.compile(r"^(.+):([0-9]+)\.([0-9]+),([0-9]+)\.([0-9]+) ([0-9]+) ([0-9]+)$")


def _parse_mode(line: str) -> ProfileMode:
    if not line.startswith(_MODE_PREFIX):
        raise ProfileError.malformed_header(line)
    try:
        return ProfileMode(line[len(_MODE_PREFIX) :].strip())
    except ValueError:
        raise ProfileError.malformed_header(line) from None


def parse_profiles(text: str) -> list[Profile]:
    """Parse profile text into one Profile per file.

    Args:
        text: Full profile content, header line first.

    Returns:
        Profiles in order of first appearance of their file. Blocks keep
        input order. Empty text or a header without blocks yields [].

    Raises:
        ProfileError: Missing/bad mode line, or a block line that doesn't
            match the expected format.
    """
    lines = text.split("\n")
    if not any(line.strip() for line in lines):
        return []

    mode = _parse_mode(lines[0].rstrip("\r"))
    files: dict[str, Profile] = {}

    for line_no, raw in enumerate(lines[1:], start=2):
        line = raw.rstrip("\r")
        if not line.strip():
            continue

        m = _BLOCK_RE.match(line)
        if m is None:
            raise ProfileError.malformed_block(line_no, line)

        file_name = m.group(1)
        start_line, start_col, end_line, end_col, num_stmt, count = (
            int(g) for g in m.groups()[1:]
        )
        if (start_line, start_col) > (end_line, end_col):
            raise ProfileError.malformed_block(line_no, line)

        profile = files.get(file_name)
        if profile is None:
            profile = files[file_name] = Profile(file_name=file_name, mode=mode)
        profile.blocks.append(
            CoverageBlock(
                start_line=start_line,
                start_col=start_col,
                end_line=end_line,
                end_col=end_col,
                num_stmt=num_stmt,
                count=count,
            )
        )

    log.debug(
        "profile_parsed",
        mode=mode.value,
        files=len(files),
        blocks=sum(len(p.blocks) for p in files.values()),
    )
    return list(files.values())


def read_profiles(path: Path) -> list[Profile]:
    """Read and parse a profile file written by go test -coverprofile."""
    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ProfileError.read_error(str(path), str(e)) from e
    return parse_profiles(content)
