"""Running ``go test`` to produce a coverage profile."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from gocoveralls.config.models import TestRunConfig
from gocoveralls.core.errors import TestRunError
from gocoveralls.core.logging import get_logger

log = get_logger("testrun")


def build_command(
    go: str,
    profile_path: Path,
    packages: Sequence[str],
    config: TestRunConfig,
) -> list[str]:
    """Assemble the go test command line."""
    cmd = [go, "test", f"-covermode={config.cover_mode}", f"-coverprofile={profile_path}"]
    if config.verbose:
        cmd.append("-v")
    if config.race:
        cmd.append("-race")
    cmd.extend(config.extra_args)
    cmd.extend(packages or ["./..."])
    return cmd


def run_go_test(
    packages: Sequence[str],
    *,
    config: TestRunConfig,
    cwd: Path | None = None,
) -> str:
    """Run go test with coverage and return the profile text.

    Args:
        packages: Package patterns; ``./...`` when empty.
        config: Cover mode, flags and timeout.
        cwd: Directory to run in (the module root).

    Raises:
        TestRunError: go not on PATH, tests failed, or the run timed out.
    """
    go = shutil.which("go")
    if go is None:
        raise TestRunError.tool_not_found("go")

    with tempfile.TemporaryDirectory(prefix="gocoveralls-") as tmp:
        profile_path = Path(tmp) / "cover.out"
        cmd = build_command(go, profile_path, packages, config)
        log.info("go_test_started", cmd=cmd, cwd=str(cwd) if cwd else None)

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=config.timeout_sec,
            )
        except subprocess.TimeoutExpired as e:
            raise TestRunError.timeout(config.timeout_sec) from e

        if result.returncode != 0:
            raise TestRunError.failed(result.returncode, result.stderr or result.stdout)

        if not profile_path.exists():
            # go test writes no profile when no package has test files
            log.warning("go_test_no_profile", cmd=cmd)
            return ""

        log.info("go_test_finished")
        return profile_path.read_text()
