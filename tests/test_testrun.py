"""Tests for running go test."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from gocoveralls import testrun
from gocoveralls.config.models import TestRunConfig as RunConfig
from gocoveralls.core.errors import ErrorCode
from gocoveralls.core.errors import TestRunError as RunError
from gocoveralls.testrun import build_command, run_go_test

PROFILE = "mode: count\nexample.com/p/a.go:1.1,2.2 1 1\n"


class TestBuildCommand:
    """Tests for build_command."""

    def test_defaults(self) -> None:
        cmd = build_command("/usr/bin/go", Path("/tmp/c.out"), [], RunConfig())

        assert cmd == [
            "/usr/bin/go",
            "test",
            "-covermode=count",
            "-coverprofile=/tmp/c.out",
            "./...",
        ]

    def test_flags_and_packages(self) -> None:
        config = RunConfig(
            cover_mode="atomic", race=True, verbose=True, extra_args=["-tags", "integration"]
        )

        cmd = build_command("go", Path("c.out"), ["./pkg/...", "./cmd"], config)

        assert cmd == [
            "go",
            "test",
            "-covermode=atomic",
            "-coverprofile=c.out",
            "-v",
            "-race",
            "-tags",
            "integration",
            "./pkg/...",
            "./cmd",
        ]


def _fake_run(returncode: int = 0, *, write_profile: bool = True, stderr: str = ""):
    calls: list[dict[str, Any]] = []

    def run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append({"cmd": cmd, **kwargs})
        if write_profile:
            profile_arg = next(a for a in cmd if a.startswith("-coverprofile="))
            Path(profile_arg.split("=", 1)[1]).write_text(PROFILE)
        return subprocess.CompletedProcess(cmd, returncode, stdout="", stderr=stderr)

    return run, calls


class TestRunGoTest:
    """Tests for run_go_test with subprocess patched."""

    @pytest.fixture(autouse=True)
    def go_on_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(testrun.shutil, "which", lambda name: f"/usr/local/go/bin/{name}")

    def test_returns_profile_text(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        run, calls = _fake_run()
        monkeypatch.setattr(testrun.subprocess, "run", run)

        text = run_go_test(["./..."], config=RunConfig(timeout_sec=12), cwd=tmp_path)

        assert text == PROFILE
        assert calls[0]["cmd"][:2] == ["/usr/local/go/bin/go", "test"]
        assert calls[0]["cwd"] == tmp_path
        assert calls[0]["timeout"] == 12

    def test_no_profile_written(self, monkeypatch: pytest.MonkeyPatch) -> None:
        run, _ = _fake_run(write_profile=False)
        monkeypatch.setattr(testrun.subprocess, "run", run)

        assert run_go_test([], config=RunConfig()) == ""

    def test_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        run, _ = _fake_run(returncode=1, stderr="--- FAIL: TestA\nFAIL\n")
        monkeypatch.setattr(testrun.subprocess, "run", run)

        with pytest.raises(RunError) as exc_info:
            run_go_test([], config=RunConfig())

        assert exc_info.value.code == ErrorCode.TESTRUN_FAILED
        assert "--- FAIL: TestA" in exc_info.value.details["stderr"]

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr(testrun.subprocess, "run", run)

        with pytest.raises(RunError) as exc_info:
            run_go_test([], config=RunConfig(timeout_sec=1))

        assert exc_info.value.code == ErrorCode.TESTRUN_TIMEOUT

    def test_go_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(testrun.shutil, "which", lambda name: None)

        with pytest.raises(RunError) as exc_info:
            run_go_test([], config=RunConfig())

        assert exc_info.value.code == ErrorCode.TESTRUN_TOOL_NOT_FOUND
