from __future__ import annotations

"""
Version Control Boundary.

Thin wrapper over the `git` executable. All commands run with the tree root
as their working directory (passed to subprocess, never via chdir) and any
failure is raised as VcsError carrying git's stderr.
"""

import logging
import os
import subprocess
from typing import List, Optional, Sequence

from repogen.domain.generation_models import VcsError

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def is_repository(root: str) -> bool:
    """True if `root` itself holds a git repository (a `.git` entry)."""
    return os.path.exists(os.path.join(root, ".git"))


def init_repository(root: str) -> bool:
    """
    Initialize a repository at `root` unless one already exists there.

    Returns:
        bool: True if a new repository was created.
    """
    if is_repository(root):
        logger.debug(f"Repository already initialized at {root}")
        return False
    run_git(["init"], root)
    logger.info(f"Initialized git repository at {root}")
    return True


def stage_all(root: str) -> None:
    """Stage every entry under `root`."""
    run_git(["add", "-A"], root)


def commit(
        root: str,
        message: str,
        *,
        author_name: Optional[str] = None,
        author_email: Optional[str] = None,
        allow_empty: bool = False,
) -> str:
    """
    Record the staged tree as a commit.

    Args:
        root: Repository root.
        message: Commit message.
        author_name: Optional user.name override for this commit only.
        author_email: Optional user.email override for this commit only.
        allow_empty: Commit even when the index matches HEAD (or is empty).

    Returns:
        str: Hash of the new HEAD commit.
    """
    config_args: List[str] = []
    if author_name:
        config_args += ["-c", f"user.name={author_name}"]
    if author_email:
        config_args += ["-c", f"user.email={author_email}"]

    commit_args = ["commit", "--quiet"]
    if allow_empty:
        commit_args.append("--allow-empty")

    run_git(config_args + commit_args + ["-m", message], root)
    return head_commit(root)


def snapshot(
        root: str,
        message: str,
        *,
        author_name: Optional[str] = None,
        author_email: Optional[str] = None,
) -> str:
    """
    Initialize, stage everything and commit, in that order.

    The commit is recorded even when nothing is staged: git does not track
    empty directories, so a tree without placeholder files stages nothing.

    Returns:
        str: Hash of the snapshot commit.
    """
    init_repository(root)
    logger.info("Staging generated tree...")
    stage_all(root)
    logger.info("Committing snapshot...")
    commit_hash = commit(
        root, message,
        author_name=author_name,
        author_email=author_email,
        allow_empty=True,
    )
    logger.info(f"Snapshot committed: {commit_hash}")
    return commit_hash


def head_commit(root: str) -> str:
    return run_git(["rev-parse", "HEAD"], root).strip()


def count_commits(root: str) -> int:
    """Number of commits reachable from HEAD."""
    return int(run_git(["rev-list", "--count", "HEAD"], root).strip())


def list_tracked_files(root: str) -> List[str]:
    """Paths (relative, '/'-separated) tracked in the index."""
    output = run_git(["ls-files", "-z"], root)
    return [p for p in output.split("\0") if p]


def run_git(args: Sequence[str], cwd: str) -> str:
    """
    Execute a git command and return its stdout.

    Raises:
        VcsError: If git is missing, cannot be started, or exits non-zero.
    """
    cmd = [GIT_EXECUTABLE, *args]
    printable = " ".join(cmd)
    logger.debug(f"Running: {printable} (cwd={cwd})")

    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as e:
        raise VcsError(f"git executable not found: {e}", command=printable) from e
    except OSError as e:
        raise VcsError(f"Cannot run '{printable}': {e}", command=printable) from e

    if proc.returncode != 0:
        stderr = (proc.stderr or proc.stdout or "").strip()
        raise VcsError(
            f"Git command failed ({proc.returncode}): {printable}: {stderr}",
            command=printable,
            stderr=stderr,
        )

    return proc.stdout
