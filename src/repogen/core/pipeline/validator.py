from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration sources (defaults, JSON files, CLI
flags) and the engine. Coerces types, fills missing keys with defaults and
collects warnings; in strict mode the first problem raises instead.

The schedule has no fallback: a malformed schedule raises in both modes.
"""

import logging
from typing import Any, Dict, List, Tuple

from repogen.domain.config import get_default_config
from repogen.domain.schedule import Schedule, parse_schedule

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise TypeError/ValueError instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode on a type mismatch, or for a non-list schedule.
        ValueError: In strict mode on an out-of-range value, or for a malformed
                    schedule.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None})

    for field in ("root_path", "commit_message"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("author_name", "author_email"):
        merged[field] = _as_optional_str(merged.get(field), field, warnings, strict)

    merged["commit"] = _as_bool(merged.get("commit"), defaults["commit"], "commit", warnings, strict)

    for field in ("files_per_dir", "max_entries"):
        merged[field] = _as_non_negative_int(
            merged.get(field), defaults[field], field, warnings, strict
        )

    merged["schedule"] = _as_schedule(merged.get("schedule"), defaults["schedule"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return ""


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback

    result: Any = None
    if isinstance(value, int) and not isinstance(value, bool):
        result = value
    elif isinstance(value, str) and not strict:
        try:
            result = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {result}.")
        except ValueError:
            result = None

    if result is None:
        _reject(f"Invalid field '{field}': expected int, received {value!r}.", warnings, strict)
        return fallback

    if result < 0:
        _reject(f"Invalid field '{field}': must be >= 0, received {result}.", warnings, strict, ValueError)
        return fallback

    return result


def _as_schedule(value: Any, fallback: Schedule) -> Schedule:
    """
    Accept a schedule string, a list of levels/pairs, or a parsed schedule.

    Raises:
        TypeError: If the value is not a string or a list.
        ValueError: If any level is malformed.
    """
    if value is None:
        return fallback
    if not isinstance(value, (str, list, tuple)):
        raise TypeError(
            f"Invalid field 'schedule': expected str or list, received {type(value).__name__}."
        )
    try:
        return parse_schedule(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid field 'schedule': {e}") from e
