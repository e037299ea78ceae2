from __future__ import annotations

"""
Generation Domain Models.

Defines the error taxonomy raised by the generator and the version-control
boundary, and the result object handed from the engine to the interface
layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from repogen.domain.schedule import format_schedule

# -----------------------------------------------------------------------------
# ERROR TAXONOMY
# -----------------------------------------------------------------------------

class GenerationError(Exception):
    """Base class for fatal generation failures."""

    kind: str = "generation"


class FileSystemError(GenerationError):
    """A directory or placeholder file could not be created."""

    kind = "filesystem"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class VcsError(GenerationError):
    """A git command (init, add, commit or read-back) failed."""

    kind = "vcs"

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.command = command
        self.stderr = stderr

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a complete generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: "filesystem", "vcs" or "preflight" on failure.
        root_path: Absolute root of the generated tree.
        files_per_dir: Placeholder files per directory.
        schedule: Textual form of the fan-out schedule.
        directories: Directories created (projected on dry runs).
        files: Placeholder files created (projected on dry runs).
        directories_per_depth: Directory count keyed by depth label.
        commit_hash: Hash of the snapshot commit, empty if none was made.
        dry_run: Whether the run only projected the shape.
        summary: Free-form execution metadata.
    """
    ok: bool
    error: str

    root_path: str
    files_per_dir: int
    schedule: str

    error_kind: str = ""
    directories: int = 0
    files: int = 0
    directories_per_depth: Dict[int, int] = field(default_factory=dict)
    commit_hash: str = ""
    dry_run: bool = False

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        kind: str,
        cfg: Dict[str, Any],
        root_path: str,
        directories: int = 0,
        files: int = 0,
        summary_extra: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Create a failed generation result.

    Args:
        error: Detailed error description.
        kind: Error category identifier.
        cfg: Normalized configuration of the failed run.
        root_path: Absolute target root.
        directories: Directories created before the failure.
        files: Files created before the failure.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        GenerationResult: An immutable error result.
    """
    return GenerationResult(
        ok=False,
        error=error,
        error_kind=kind,
        root_path=root_path,
        files_per_dir=cfg.get("files_per_dir", 0),
        schedule=format_schedule(cfg.get("schedule", ())),
        directories=directories,
        files=files,
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        root_path: str,
        directories: int,
        files: int,
        directories_per_depth: Optional[Dict[int, int]] = None,
        commit_hash: str = "",
        dry_run: bool = False,
        summary_extra: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Create a successful generation result.

    Args:
        cfg: Normalized configuration used for the run.
        root_path: Absolute root of the tree.
        directories: Directory total.
        files: Placeholder file total.
        directories_per_depth: Per-depth directory breakdown.
        commit_hash: Snapshot commit hash.
        dry_run: Whether this was a projection only.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        GenerationResult: An immutable success result.
    """
    return GenerationResult(
        ok=True,
        error="",
        root_path=root_path,
        files_per_dir=cfg.get("files_per_dir", 0),
        schedule=format_schedule(cfg.get("schedule", ())),
        directories=directories,
        files=files,
        directories_per_depth=directories_per_depth or {},
        commit_hash=commit_hash,
        dry_run=dry_run,
        summary=summary_extra or {},
    )
