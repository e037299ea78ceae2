from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so tests run without installation.
2. Provides a small configuration and a git identity usable on machines
   without a global git config.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """
    Isolate git from the user's global configuration.

    Points HOME and the global/system config at a sandbox whose global
    config carries a test identity.
    """
    home = tmp_path_factory.mktemp("git_home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("GIT_AUTHOR_NAME", "GIT_AUTHOR_EMAIL", "GIT_COMMITTER_NAME", "GIT_COMMITTER_EMAIL"):
        monkeypatch.delenv(var, raising=False)

    gitconfig = home / ".gitconfig"
    gitconfig.write_text(
        "[user]\n\tname = Repogen Tests\n\temail = tests@repogen.invalid\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(gitconfig))


@pytest.fixture
def small_config_dict(tmp_path) -> Dict[str, Any]:
    """
    A configuration small enough to materialize in a test.

    Shape: root + 2 children at depth 2, each with 3 at depth 3
    (9 directories, 2 files each).
    """
    return {
        "root_path": str(tmp_path / "samplerepo"),
        "files_per_dir": 2,
        "schedule": "2:2,3:3",
        "commit": True,
        "commit_message": "Initial commit of large sample repository",
        "author_name": "",
        "author_email": "",
        "max_entries": 0,
    }
