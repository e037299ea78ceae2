from __future__ import annotations

"""
Core orchestration pipeline.

Runs one generation end to end:
1. Validates configuration and resolves the root path.
2. Projects the tree shape and applies the entry cap.
3. Refuses a non-empty root unless forced.
4. Materializes the tree.
5. Records the snapshot commit.
6. Optionally reads the commit back for verification.

A malformed schedule ends the run before anything is written. Filesystem
and git failures are fatal: they end the run with an error result and leave
whatever was created in place.
"""

import logging
import os
from typing import Any, Dict, Optional

from repogen.core.pipeline.validator import validate_config
from repogen.core.services import vcs
from repogen.core.services.generator import generate_tree, iter_placeholder_paths
from repogen.domain.constants import DEFAULT_ROOT_PATH, ROOT_DEPTH
from repogen.domain.generation_models import (
    GenerationError,
    GenerationResult,
    create_error_result,
    create_success_result,
)
from repogen.domain.schedule import Schedule, directories_per_level, project_totals
from repogen.infra.fs import is_non_empty_dir, normalize_path

logger = logging.getLogger(__name__)

# Progress is reported for directories at the first schedule level
_PROGRESS_LEVEL_INDEX = 0


def run_generation(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        force: bool = False,
        verify: bool = False,
) -> GenerationResult:
    """
    Execute a full generation run.

    Args:
        config: Raw or partial configuration dictionary.
        dry_run: Only project the shape; touch nothing on disk.
        force: Allow generating into a non-empty root.
        verify: After committing, read back commit and tracked-file counts.

    Returns:
        GenerationResult: Status, totals and summary of the run.
    """
    logger.info("Generation started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    try:
        cfg, warnings = validate_config(config, strict=False)
    except (TypeError, ValueError) as e:
        msg = f"Invalid configuration: {e}"
        logger.error(msg)
        raw_root = config.get("root_path") if isinstance(config, dict) else None
        root_path = normalize_path(raw_root if isinstance(raw_root, str) else None, DEFAULT_ROOT_PATH)
        return create_error_result(msg, "preflight", {}, root_path)

    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root_path = normalize_path(cfg["root_path"], os.getcwd())
    schedule = cfg["schedule"]
    files_per_dir = cfg["files_per_dir"]

    # -------------------------------------------------------------------------
    # 2) Projection & Entry Cap
    # -------------------------------------------------------------------------
    proj_dirs, proj_files = project_totals(schedule, files_per_dir)
    projected_entries = proj_dirs + proj_files
    per_depth = _projected_per_depth(schedule)

    logger.info(
        f"Projected shape: {proj_dirs:,} directories, {proj_files:,} files "
        f"({projected_entries:,} entries)"
    )

    summary: Dict[str, Any] = {
        "projected_directories": proj_dirs,
        "projected_files": proj_files,
        "projected_entries": projected_entries,
        "commit_enabled": cfg["commit"],
        "warnings": list(warnings),
    }

    max_entries = cfg["max_entries"]
    if max_entries and projected_entries > max_entries:
        msg = (
            f"Projected {projected_entries:,} entries exceeds max_entries={max_entries:,}. "
            f"Raise or disable the cap to proceed."
        )
        logger.error(msg)
        return create_error_result(msg, "preflight", cfg, root_path, summary_extra=summary)

    # -------------------------------------------------------------------------
    # 3) Root Pre-flight
    # -------------------------------------------------------------------------
    try:
        occupied = is_non_empty_dir(root_path)
    except GenerationError as e:
        logger.error(str(e))
        return create_error_result(str(e), e.kind, cfg, root_path, summary_extra=summary)

    if occupied and not force:
        msg = f"Root path '{root_path}' is not empty. Use force to generate into it anyway."
        logger.error(msg)
        return create_error_result(msg, "preflight", cfg, root_path, summary_extra=summary)

    if dry_run:
        logger.info("Dry run: nothing written.")
        return create_success_result(
            cfg, root_path, proj_dirs, proj_files,
            directories_per_depth=per_depth,
            dry_run=True,
            summary_extra=summary,
        )

    # -------------------------------------------------------------------------
    # 4) Materialization
    # -------------------------------------------------------------------------
    progress_depth = schedule[_PROGRESS_LEVEL_INDEX].depth if schedule else None
    progress_total = schedule[_PROGRESS_LEVEL_INDEX].children if schedule else 0
    progress = {"done": 0}

    def _on_directory(path: str, depth: int) -> None:
        if depth == progress_depth:
            progress["done"] += 1
            logger.info(f"[{progress['done']}/{progress_total}] {os.path.basename(path)}")
        else:
            logger.debug(f"Created {path}")

    logger.info(f"Creating repository tree at {root_path}")
    try:
        stats = generate_tree(root_path, schedule, files_per_dir, on_directory=_on_directory)
    except GenerationError as e:
        logger.error(f"Generation aborted: {e}")
        return create_error_result(str(e), e.kind, cfg, root_path, summary_extra=summary)

    logger.info(f"Tree created: {stats.directories:,} directories, {stats.files:,} files")

    # -------------------------------------------------------------------------
    # 5) Snapshot Commit
    # -------------------------------------------------------------------------
    commit_hash = ""
    if cfg["commit"]:
        try:
            commit_hash = vcs.snapshot(
                root_path,
                cfg["commit_message"],
                author_name=cfg["author_name"] or None,
                author_email=cfg["author_email"] or None,
            )
        except GenerationError as e:
            logger.error(f"Snapshot failed: {e}")
            return create_error_result(
                str(e), e.kind, cfg, root_path,
                directories=stats.directories,
                files=stats.files,
                summary_extra=summary,
            )

    # -------------------------------------------------------------------------
    # 6) Read-back Verification
    # -------------------------------------------------------------------------
    if verify and commit_hash:
        try:
            tracked = set(vcs.list_tracked_files(root_path))
            missing = sum(
                1 for p in iter_placeholder_paths(schedule, files_per_dir) if p not in tracked
            )
            summary["verify"] = {
                "commits": vcs.count_commits(root_path),
                "tracked_files": len(tracked),
                "missing_files": missing,
                "all_files_tracked": missing == 0,
            }
        except GenerationError as e:
            logger.error(f"Verification failed: {e}")
            return create_error_result(
                str(e), e.kind, cfg, root_path,
                directories=stats.directories,
                files=stats.files,
                summary_extra=summary,
            )

    logger.info(f"Repository creation complete at {root_path}")
    return create_success_result(
        cfg, root_path, stats.directories, stats.files,
        directories_per_depth=dict(stats.directories_per_depth),
        commit_hash=commit_hash,
        summary_extra=summary,
    )


def _projected_per_depth(schedule: Schedule) -> Dict[int, int]:
    per_depth: Dict[int, int] = {ROOT_DEPTH: 1}
    for level, count in zip(schedule, directories_per_level(schedule)):
        if count:
            per_depth[level.depth] = per_depth.get(level.depth, 0) + count
    return per_depth
