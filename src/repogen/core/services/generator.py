from __future__ import annotations

"""
Tree Generator Service.

Materializes a directory tree from a fan-out schedule. The root and every
directory below it receive the same number of one-line placeholder files.
Descent is depth-first in schedule order, strictly sequential, and every
filesystem call receives a fully qualified path.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional, Sequence

from repogen.domain.constants import (
    DIRECTORY_NAME_TEMPLATE,
    PLACEHOLDER_NAME_TEMPLATE,
    PLACEHOLDER_TEXT_TEMPLATE,
    ROOT_DEPTH,
)
from repogen.domain.schedule import FanOutLevel
from repogen.infra.fs import ensure_dir, relative_posix, write_text_file

logger = logging.getLogger(__name__)

DirectoryObserver = Callable[[str, int], None]

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class GenerationStats:
    """
    Running totals of a generation pass.

    Attributes:
        directories: Directories created, root included.
        files: Placeholder files written.
        directories_per_depth: Directory count keyed by depth label.
    """
    directories: int = 0
    files: int = 0
    directories_per_depth: Dict[int, int] = field(default_factory=dict)

    def record_directory(self, depth: int, files_written: int) -> None:
        self.directories += 1
        self.files += files_written
        self.directories_per_depth[depth] = self.directories_per_depth.get(depth, 0) + 1

# -----------------------------------------------------------------------------
# NAMING
# -----------------------------------------------------------------------------

def directory_name(depth: int, index: int) -> str:
    return DIRECTORY_NAME_TEMPLATE.format(depth=depth, index=index)


def placeholder_name(index: int) -> str:
    return PLACEHOLDER_NAME_TEMPLATE.format(index=index)


def placeholder_text(relative_dir: str, index: int) -> str:
    """
    Build the single-line payload of a placeholder file.

    Args:
        relative_dir: Directory path relative to the root, '/'-separated
                      ('.' for the root).
        index: 1-based file index within the directory.

    Returns:
        str: Newline-terminated content line.
    """
    return PLACEHOLDER_TEXT_TEMPLATE.format(
        directory=relative_dir,
        name=placeholder_name(index),
    )

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def populate_directory(root: str, directory: str, files_per_dir: int) -> int:
    """
    Write the placeholder files of a single directory.

    Args:
        root: Absolute tree root, used to derive the relative path in content.
        directory: Absolute directory to populate.
        files_per_dir: Number of files to write.

    Returns:
        int: Number of files written.

    Raises:
        FileSystemError: On the first file that cannot be written.
    """
    rel = relative_posix(directory, root)
    for i in range(1, files_per_dir + 1):
        write_text_file(os.path.join(directory, placeholder_name(i)), placeholder_text(rel, i))
    return files_per_dir


def generate_tree(
        root: str,
        schedule: Sequence[FanOutLevel],
        files_per_dir: int,
        *,
        on_directory: Optional[DirectoryObserver] = None,
) -> GenerationStats:
    """
    Create the tree described by `schedule` under `root`.

    The root is created (parents included) and populated first. Then, for each
    schedule level in order, each parent receives `children` subdirectories
    named dir{depth}_{index}, each populated and then descended into with the
    remaining levels. A level with zero children ends its branch.

    Args:
        root: Output root path.
        schedule: Ordered fan-out levels.
        files_per_dir: Placeholder files per directory (0 allowed).
        on_directory: Optional observer called as (path, depth) after each
                      directory is populated.

    Returns:
        GenerationStats: Totals of what was created.

    Raises:
        FileSystemError: On the first creation failure. Nothing is rolled back.
        ValueError: If files_per_dir is negative.
    """
    if files_per_dir < 0:
        raise ValueError(f"files_per_dir must be >= 0, received {files_per_dir}")

    root = os.path.abspath(root)
    levels = tuple(schedule)
    stats = GenerationStats()

    logger.debug(f"Generating tree at {root} ({len(levels)} levels, {files_per_dir} files/dir)")

    ensure_dir(root)
    written = populate_directory(root, root, files_per_dir)
    stats.record_directory(ROOT_DEPTH, written)
    if on_directory:
        on_directory(root, ROOT_DEPTH)

    _descend(root, root, levels, 0, files_per_dir, stats, on_directory)

    logger.debug(f"Tree complete: {stats.directories} directories, {stats.files} files")
    return stats


def iter_placeholder_paths(schedule: Sequence[FanOutLevel], files_per_dir: int) -> Iterator[str]:
    """
    Yield the root-relative, '/'-separated path of every placeholder file
    `generate_tree` writes for this shape, in creation order. Nothing is
    read from or written to disk.
    """
    yield from _iter_paths("", tuple(schedule), 0, files_per_dir)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _descend(
        root: str,
        parent: str,
        levels: Sequence[FanOutLevel],
        position: int,
        files_per_dir: int,
        stats: GenerationStats,
        on_directory: Optional[DirectoryObserver],
) -> None:
    if position >= len(levels):
        return

    level = levels[position]
    for index in range(1, level.children + 1):
        child = os.path.join(parent, directory_name(level.depth, index))
        ensure_dir(child)
        written = populate_directory(root, child, files_per_dir)
        stats.record_directory(level.depth, written)
        if on_directory:
            on_directory(child, level.depth)

        _descend(root, child, levels, position + 1, files_per_dir, stats, on_directory)


def _iter_paths(
        prefix: str,
        levels: Sequence[FanOutLevel],
        position: int,
        files_per_dir: int,
) -> Iterator[str]:
    for i in range(1, files_per_dir + 1):
        yield prefix + placeholder_name(i)

    if position >= len(levels):
        return

    level = levels[position]
    for index in range(1, level.children + 1):
        child_prefix = f"{prefix}{directory_name(level.depth, index)}/"
        yield from _iter_paths(child_prefix, levels, position + 1, files_per_dir)
