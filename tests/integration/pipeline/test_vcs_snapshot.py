from __future__ import annotations

"""
Integration tests for the Version Control boundary.

Runs the real git executable inside temporary directories with an isolated
identity (see the git_identity fixture).
"""

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from repogen.core.services import vcs
from repogen.core.services.generator import generate_tree
from repogen.domain.generation_models import VcsError
from repogen.domain.schedule import parse_schedule

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


def test_init_repository_is_idempotent(tmp_path: Path, git_identity) -> None:
    """TC-01: init runs once; an existing repository is reused."""
    assert vcs.is_repository(str(tmp_path)) is False
    assert vcs.init_repository(str(tmp_path)) is True
    assert vcs.is_repository(str(tmp_path)) is True
    assert vcs.init_repository(str(tmp_path)) is False


def test_snapshot_commits_whole_tree(tmp_path: Path, git_identity) -> None:
    """TC-02: One commit containing every generated file."""
    root = tmp_path / "repo"
    stats = generate_tree(str(root), parse_schedule("2:2,3:2"), 2)

    commit_hash = vcs.snapshot(str(root), "Initial commit of large sample repository")

    assert len(commit_hash) >= 40
    assert vcs.count_commits(str(root)) == 1

    tracked = set(vcs.list_tracked_files(str(root)))
    on_disk = {
        p.relative_to(root).as_posix()
        for p in root.rglob("*")
        if p.is_file() and ".git" not in p.relative_to(root).parts
    }
    assert len(tracked) == stats.files
    assert tracked == on_disk
    assert "dir2_2/dir3_1/file2.txt" in tracked

    message = vcs.run_git(["log", "-1", "--format=%s"], str(root)).strip()
    assert message == "Initial commit of large sample repository"


def test_commit_with_explicit_author(tmp_path: Path, git_identity) -> None:
    root = tmp_path / "repo"
    generate_tree(str(root), (), 1)
    vcs.init_repository(str(root))
    vcs.stage_all(str(root))

    vcs.commit(str(root), "snap", author_name="Tree Bot", author_email="bot@example.com")

    author = vcs.run_git(["log", "-1", "--format=%an <%ae>"], str(root)).strip()
    assert author == "Tree Bot <bot@example.com>"


def test_commit_with_nothing_staged_fails(tmp_path: Path, git_identity) -> None:
    """TC-03: A plain commit with an empty index raises VcsError."""
    vcs.init_repository(str(tmp_path))

    with pytest.raises(VcsError) as exc_info:
        vcs.commit(str(tmp_path), "empty")

    assert "commit" in exc_info.value.command


def test_missing_git_binary_raises_vcs_error(tmp_path: Path) -> None:
    with patch.object(vcs, "GIT_EXECUTABLE", "git-binary-that-does-not-exist"):
        with pytest.raises(VcsError, match="not found"):
            vcs.init_repository(str(tmp_path))


def test_snapshot_of_directories_only_tree(tmp_path: Path, git_identity) -> None:
    """TC-04: Empty directories stage nothing; the snapshot still records one commit."""
    root = tmp_path / "repo"
    generate_tree(str(root), parse_schedule("2:3"), 0)

    commit_hash = vcs.snapshot(str(root), "Initial commit of large sample repository")

    assert commit_hash == vcs.head_commit(str(root))
    assert vcs.count_commits(str(root)) == 1
    assert vcs.list_tracked_files(str(root)) == []
