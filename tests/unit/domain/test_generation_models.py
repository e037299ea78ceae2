from __future__ import annotations

"""
Unit tests for Generation Domain Models.

Validates the error taxonomy and the result factory functions.
"""

import dataclasses

import pytest

from repogen.domain.generation_models import (
    FileSystemError,
    GenerationError,
    GenerationResult,
    VcsError,
    create_error_result,
    create_success_result,
)
from repogen.domain.schedule import parse_schedule


@pytest.fixture
def cfg():
    return {"files_per_dir": 4, "schedule": parse_schedule("2:3,3:1")}


def test_error_taxonomy_kinds() -> None:
    """TC-01: Both fatal categories share a base and expose their kind."""
    fs_err = FileSystemError("boom", path="/x")
    vcs_err = VcsError("git died", command="git commit", stderr="nope")

    assert isinstance(fs_err, GenerationError)
    assert isinstance(vcs_err, GenerationError)
    assert fs_err.kind == "filesystem"
    assert fs_err.path == "/x"
    assert vcs_err.kind == "vcs"
    assert vcs_err.command == "git commit"
    assert vcs_err.stderr == "nope"


def test_create_error_result(cfg) -> None:
    """TC-02: Error results carry the message, kind and partial totals."""
    result = create_error_result("disk full", "filesystem", cfg, "/root/out", directories=3, files=12)

    assert isinstance(result, GenerationResult)
    assert result.ok is False
    assert result.error == "disk full"
    assert result.error_kind == "filesystem"
    assert result.schedule == "2:3,3:1"
    assert result.files_per_dir == 4
    assert result.directories == 3
    assert result.files == 12
    assert result.commit_hash == ""


def test_create_success_result(cfg) -> None:
    """TC-03: Success results expose totals and commit hash."""
    result = create_success_result(
        cfg, "/root/out", 7, 28,
        directories_per_depth={1: 1, 2: 3, 3: 3},
        commit_hash="abc123",
        summary_extra={"projected_entries": 35},
    )

    assert result.ok is True
    assert result.error == ""
    assert result.directories_per_depth == {1: 1, 2: 3, 3: 3}
    assert result.commit_hash == "abc123"
    assert result.summary["projected_entries"] == 35


def test_result_is_immutable(cfg) -> None:
    result = create_success_result(cfg, "/root/out", 1, 4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.ok = False  # type: ignore[misc]
