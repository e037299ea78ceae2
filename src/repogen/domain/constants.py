from __future__ import annotations

"""
Domain Constants.

Reference configuration of the generator: output root, placeholder density,
fan-out schedule and the snapshot commit message.
"""

from typing import Final, Tuple

APP_NAME: Final[str] = "repogen"

# -----------------------------------------------------------------------------
# REFERENCE CONFIGURATION
# -----------------------------------------------------------------------------

DEFAULT_ROOT_PATH: Final[str] = "./samplerepo"
DEFAULT_FILES_PER_DIR: Final[int] = 10
DEFAULT_COMMIT_MESSAGE: Final[str] = "Initial commit of large sample repository"

# (depth, children per parent) pairs; the root itself is depth 1
DEFAULT_SCHEDULE: Final[Tuple[Tuple[int, int], ...]] = (
    (2, 15),
    (3, 1000),
    (4, 1),
    (5, 3),
    (6, 1),
)

# 0 disables the projected-entry cap
DEFAULT_MAX_ENTRIES: Final[int] = 0

# -----------------------------------------------------------------------------
# NAMING
# -----------------------------------------------------------------------------

ROOT_DEPTH: Final[int] = 1
DIRECTORY_NAME_TEMPLATE: Final[str] = "dir{depth}_{index}"
PLACEHOLDER_NAME_TEMPLATE: Final[str] = "file{index}.txt"
PLACEHOLDER_TEXT_TEMPLATE: Final[str] = "file content for {directory}/{name}\n"
