from __future__ import annotations

"""
Configuration Domain Management.

Provides the reference configuration dictionary and loading of optional
JSON configuration files. Values read from disk are raw; normalization is
the validator's job.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from repogen.domain.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_FILES_PER_DIR,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_ROOT_PATH,
    DEFAULT_SCHEDULE,
)
from repogen.domain.schedule import parse_schedule

logger = logging.getLogger(__name__)

# Keys understood by the generator; anything else in a config file is ignored
CONFIG_KEYS = (
    "root_path",
    "files_per_dir",
    "schedule",
    "commit",
    "commit_message",
    "author_name",
    "author_email",
    "max_entries",
)

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the reference configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Output
        "root_path": DEFAULT_ROOT_PATH,

        # Shape
        "files_per_dir": DEFAULT_FILES_PER_DIR,
        "schedule": parse_schedule(DEFAULT_SCHEDULE),

        # Snapshot
        "commit": True,
        "commit_message": DEFAULT_COMMIT_MESSAGE,
        "author_name": "",
        "author_email": "",

        # Safety
        "max_entries": DEFAULT_MAX_ENTRIES,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Read a JSON configuration file.

    Unknown keys are dropped with a warning. Missing or unreadable files are
    an error: an explicitly requested config must be honored.

    Args:
        path: Path to the JSON document.

    Returns:
        Dict[str, Any]: Raw configuration subset found in the file.

    Raises:
        ValueError: If the file cannot be read or is not a JSON object.
    """
    full = os.path.abspath(os.path.expanduser(path))
    try:
        with open(full, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ValueError(f"Cannot read config file '{full}': {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed config file '{full}': {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file '{full}' must contain a JSON object.")

    unknown = sorted(k for k in data if k not in CONFIG_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {full}: {', '.join(unknown)}")

    logger.debug(f"Configuration loaded from {full}")
    return {k: v for k, v in data.items() if k in CONFIG_KEYS}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Retrieve the active configuration: defaults overlaid with an optional file.
    """
    cfg = get_default_config()
    if path:
        cfg.update(load_config_file(path))
    return cfg
