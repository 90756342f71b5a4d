"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
isolates tests from the developer's global config and CI environment.
"""

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of gocoveralls modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("gocoveralls"):
        del sys.modules[module_name]

_ISOLATED_PREFIXES = ("GOCOVERALLS__", "COVERALLS_")
_ISOLATED_VARS = (
    "GIT_BRANCH",
    "CIRCLE_BRANCH",
    "TRAVIS_BRANCH",
    "CI_BRANCH",
    "APPVEYOR_REPO_BRANCH",
    "WERCKER_GIT_BRANCH",
    "DRONE_BRANCH",
    "BUILDKITE_BRANCH",
    "BRANCH_NAME",
    "GITHUB_REF",
)


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Hide global config and CI variables from every test."""
    for name in list(os.environ):
        if name.startswith(_ISOLATED_PREFIXES) or name in _ISOLATED_VARS:
            monkeypatch.delenv(name, raising=False)

    from gocoveralls.config import loader

    global_dir = tmp_path_factory.mktemp("global-config")
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", global_dir / "config.yaml")
    yield
