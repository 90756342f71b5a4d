"""Git metadata for coverage jobs."""

from gocoveralls.git.info import BRANCH_ENV_VARS, collect_git_info, load_branch_from_env
from gocoveralls.git.models import GitInfo, Head, Remote

__all__ = [
    "BRANCH_ENV_VARS",
    "collect_git_info",
    "load_branch_from_env",
    "GitInfo",
    "Head",
    "Remote",
]
