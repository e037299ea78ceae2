from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and the two creation primitives the generator relies on:
directory creation and single-line placeholder writes. Every primitive takes
a fully qualified path; nothing here changes the process working directory.
"""

import os
from typing import Optional

from repogen.domain.constants import APP_NAME
from repogen.domain.generation_models import FileSystemError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

UNIX_APP_DIR_NAME = f".{APP_NAME}"
WINDOWS_APP_DIR_NAME = APP_NAME

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/repogen
    - Linux/Mac: ~/.repogen

    The directory is not created here; callers create what they write into.

    Returns:
        str: Absolute path to the application data directory.
    """
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return os.path.abspath(os.path.join(base, WINDOWS_APP_DIR_NAME))

    return os.path.abspath(os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def relative_posix(path: str, root: str) -> str:
    """Return `path` relative to `root` with '/' separators ('.' for the root)."""
    rel = os.path.relpath(path, root)
    return rel.replace(os.sep, "/")

# -----------------------------------------------------------------------------
# CREATION PRIMITIVES
# -----------------------------------------------------------------------------

def ensure_dir(path: str) -> None:
    """
    Create a directory and any missing parents.

    Raises:
        FileSystemError: If the directory cannot be created.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"Cannot create directory '{path}': {e}", path=path) from e


def write_text_file(path: str, content: str) -> None:
    """
    Write `content` to `path`, replacing any previous file.

    Newlines are written verbatim so content is byte-identical across
    platforms.

    Raises:
        FileSystemError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileSystemError(f"Cannot write file '{path}': {e}", path=path) from e

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def is_non_empty_dir(path: str) -> bool:
    """
    Check whether `path` is an existing directory with at least one entry.

    Raises:
        FileSystemError: If `path` exists but is not a directory.
    """
    if not os.path.exists(path):
        return False
    if not os.path.isdir(path):
        raise FileSystemError(f"Root path '{path}' exists and is not a directory.", path=path)
    with os.scandir(path) as it:
        return any(True for _ in it)
