"""Collecting git metadata for a job.

Branch names come from CI environment variables first, since CI checkouts
are often on a detached HEAD. Variables are checked in this order and the
first non-empty one wins; GitHub's ``GITHUB_REF`` only counts for branch
refs.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import pygit2

from gocoveralls.core.logging import get_logger
from gocoveralls.git.models import GitInfo, Head, Remote

log = get_logger("git.info")

BRANCH_ENV_VARS: tuple[str, ...] = (
    "GIT_BRANCH",
    "CIRCLE_BRANCH",
    "TRAVIS_BRANCH",
    "CI_BRANCH",
    "APPVEYOR_REPO_BRANCH",
    "WERCKER_GIT_BRANCH",
    "DRONE_BRANCH",
    "BUILDKITE_BRANCH",
    "BRANCH_NAME",
)

_REFS_HEADS_PREFIX = "refs/heads/"


def load_branch_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Branch name from CI environment variables, or "" if none is set."""
    env = os.environ if environ is None else environ
    for name in BRANCH_ENV_VARS:
        value = env.get(name, "")
        if value:
            return value
    github_ref = env.get("GITHUB_REF", "")
    if github_ref.startswith(_REFS_HEADS_PREFIX):
        return github_ref[len(_REFS_HEADS_PREFIX) :]
    return ""


def _open_repository(path: Path) -> pygit2.Repository | None:
    repo_path = pygit2.discover_repository(str(path))
    if repo_path is None:
        return None
    try:
        return pygit2.Repository(repo_path)
    except pygit2.GitError:
        return None


def collect_git_info(
    path: Path,
    *,
    environ: Mapping[str, str] | None = None,
) -> GitInfo | None:
    """Compose GitInfo for the repository containing ``path``.

    Returns:
        GitInfo, or None when ``path`` is not inside a repository or HEAD has
        no commits yet. The job is then sent without git metadata.
    """
    repo = _open_repository(path)
    if repo is None:
        log.warning("git_repository_not_found", path=str(path))
        return None

    if repo.head_is_unborn:
        log.warning("git_head_unborn", path=str(path))
        return None

    commit = repo.head.peel(pygit2.Commit)
    head = Head.from_pygit2(commit)

    branch = load_branch_from_env(environ)
    if not branch:
        branch = "HEAD" if repo.head_is_detached else repo.head.shorthand

    remotes: dict[str, Remote] = {}
    for remote in repo.remotes:
        if remote.name and remote.url:
            remotes[remote.name] = Remote(name=remote.name, url=remote.url)

    info = GitInfo(
        head=head,
        branch=branch,
        remotes=tuple(remotes[name] for name in sorted(remotes)),
    )
    log.debug("git_info_collected", commit=head.id[:7], branch=branch, remotes=len(remotes))
    return info
