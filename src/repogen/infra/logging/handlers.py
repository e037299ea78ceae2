from __future__ import annotations

"""
Logging Handler Factories.

Handlers created here carry a marker attribute so reconfiguration only
detaches what repogen itself installed, leaving handlers added by pytest or
embedding applications alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

_HANDLER_TAG_ATTR: str = "_repogen_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as owned by repogen and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    return _tag_handler(sh)


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> RotatingFileHandler:
    """
    Build a RotatingFileHandler, creating the parent directory first.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Record formatter.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Raises:
        OSError: If the log file cannot be opened.
    """
    parent = os.path.dirname(os.path.abspath(log_file))
    os.makedirs(parent, exist_ok=True)

    fh = RotatingFileHandler(
        log_file,
        maxBytes=int(max_bytes),
        backupCount=int(backup_count),
        encoding="utf-8",
    )
    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
