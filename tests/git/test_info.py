"""Tests for git metadata collection."""

from pathlib import Path

import pygit2
import pytest

from gocoveralls.git import GitInfo, Head, Remote, collect_git_info, load_branch_from_env


def _workdir(repo: pygit2.Repository) -> Path:
    return Path(repo.workdir)


class TestLoadBranchFromEnv:
    """CI variables are checked in a fixed order."""

    @pytest.mark.parametrize(
        ("environ", "expected"),
        [
            ({}, ""),
            ({"GIT_BRANCH": "master"}, "master"),
            ({"CIRCLE_BRANCH": "circle"}, "circle"),
            ({"TRAVIS_BRANCH": "travis"}, "travis"),
            ({"CI_BRANCH": "ci"}, "ci"),
            ({"APPVEYOR_REPO_BRANCH": "appveyor"}, "appveyor"),
            ({"WERCKER_GIT_BRANCH": "wercker"}, "wercker"),
            ({"DRONE_BRANCH": "drone"}, "drone"),
            ({"BUILDKITE_BRANCH": "buildkite"}, "buildkite"),
            ({"BRANCH_NAME": "jenkins"}, "jenkins"),
            ({"GITHUB_REF": "refs/heads/feature/x"}, "feature/x"),
            ({"GITHUB_REF": "refs/pull/7/merge"}, ""),
            ({"GITHUB_REF": "refs/tags/v1.0"}, ""),
            ({"GIT_BRANCH": "master", "CIRCLE_BRANCH": "circle"}, "master"),
            ({"TRAVIS_BRANCH": "travis", "BRANCH_NAME": "jenkins"}, "travis"),
            ({"GIT_BRANCH": "", "DRONE_BRANCH": "drone"}, "drone"),
            ({"BRANCH_NAME": "jenkins", "GITHUB_REF": "refs/heads/gh"}, "jenkins"),
        ],
    )
    def test_branch(self, environ: dict[str, str], expected: str) -> None:
        assert load_branch_from_env(environ) == expected

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DRONE_BRANCH", "from-env")

        assert load_branch_from_env() == "from-env"


class TestCollectGitInfo:
    """Tests for collect_git_info."""

    def test_head_fields(self, temp_repo: pygit2.Repository) -> None:
        info = collect_git_info(_workdir(temp_repo), environ={})

        assert info is not None
        assert info.head.id == str(temp_repo.head.target)
        assert info.head.author_name == "Ann Author"
        assert info.head.author_email == "ann@example.com"
        assert info.head.committer_name == "Cal Committer"
        assert info.head.committer_email == "cal@example.com"
        assert info.head.message == "Add main"

    def test_branch_from_head(self, temp_repo: pygit2.Repository) -> None:
        info = collect_git_info(_workdir(temp_repo), environ={})

        assert info is not None
        assert info.branch == "main"

    def test_branch_from_environment_wins(self, temp_repo: pygit2.Repository) -> None:
        info = collect_git_info(_workdir(temp_repo), environ={"CI_BRANCH": "release"})

        assert info is not None
        assert info.branch == "release"

    def test_detached_head(self, detached_repo: pygit2.Repository) -> None:
        info = collect_git_info(_workdir(detached_repo), environ={})

        assert info is not None
        assert info.branch == "HEAD"

    def test_discovers_from_subdirectory(self, temp_repo: pygit2.Repository) -> None:
        sub = _workdir(temp_repo) / "pkg" / "sub"
        sub.mkdir(parents=True)

        info = collect_git_info(sub, environ={})

        assert info is not None
        assert info.branch == "main"

    def test_remotes_sorted_by_name(self, repo_with_remotes: pygit2.Repository) -> None:
        info = collect_git_info(_workdir(repo_with_remotes), environ={})

        assert info is not None
        assert info.remotes == (
            Remote("origin", "git@example.com:me/proj.git"),
            Remote("upstream", "https://example.com/upstream/proj.git"),
        )

    def test_no_remotes(self, temp_repo: pygit2.Repository) -> None:
        info = collect_git_info(_workdir(temp_repo), environ={})

        assert info is not None
        assert info.remotes == ()

    def test_outside_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        assert collect_git_info(plain, environ={}) is None

    def test_unborn_head(self, empty_repo: pygit2.Repository) -> None:
        assert collect_git_info(_workdir(empty_repo), environ={}) is None


class TestPayload:
    """Tests for the git section of a job payload."""

    def test_full_payload(self) -> None:
        info = GitInfo(
            head=Head(
                id="abc123",
                author_name="A",
                author_email="a@x",
                committer_name="C",
                committer_email="c@x",
                message="msg",
            ),
            branch="main",
            remotes=(Remote("origin", "https://x/y.git"),),
        )

        assert info.to_payload() == {
            "head": {
                "id": "abc123",
                "author_name": "A",
                "author_email": "a@x",
                "committer_name": "C",
                "committer_email": "c@x",
                "message": "msg",
            },
            "branch": "main",
            "remotes": [{"name": "origin", "url": "https://x/y.git"}],
        }

    def test_empty_fields_omitted(self) -> None:
        payload = GitInfo(head=Head(id="abc123"), branch="HEAD").to_payload()

        assert payload == {"head": {"id": "abc123", "message": ""}, "branch": "HEAD"}
