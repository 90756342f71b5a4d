"""Test fixtures for git module."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with one commit on main."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    (repo_path / "main.go").write_text("package main\n")
    repo.index.add("main.go")
    repo.index.write()
    tree = repo.index.write_tree()
    author = pygit2.Signature("Ann Author", "ann@example.com")
    committer = pygit2.Signature("Cal Committer", "cal@example.com")
    repo.create_commit(
        "refs/heads/main", author, committer, "Add main\n\nLonger description.\n", tree, []
    )
    repo.set_head("refs/heads/main")

    yield repo


@pytest.fixture
def repo_with_remotes(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """Repository with two remotes, created out of name order."""
    temp_repo.remotes.create("upstream", "https://example.com/upstream/proj.git")
    temp_repo.remotes.create("origin", "git@example.com:me/proj.git")
    return temp_repo


@pytest.fixture
def detached_repo(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """Repository with HEAD detached at the main commit."""
    temp_repo.set_head(temp_repo.head.target)
    return temp_repo


@pytest.fixture
def empty_repo(tmp_path: Path) -> pygit2.Repository:
    """Repository without any commits."""
    return pygit2.init_repository(str(tmp_path / "empty"), initial_head="main")
