from __future__ import annotations

"""
Fan-Out Schedule Model.

A schedule is an ordered tuple of (depth, children) pairs consumed by the
generator's recursive descent. This module parses the textual form used by
the CLI and config files ("2:15,3:1000") and projects the tree shape a
schedule will produce without touching the filesystem.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

# -----------------------------------------------------------------------------
# VALUE TYPES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FanOutLevel:
    """
    One step of the fan-out schedule.

    Attributes:
        depth: Depth label used to name directories at this level (root = 1).
        children: Number of child directories created under each parent.
    """
    depth: int
    children: int

    def __post_init__(self) -> None:
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise TypeError(f"depth must be int, received {type(self.depth).__name__}")
        if isinstance(self.children, bool) or not isinstance(self.children, int):
            raise TypeError(f"children must be int, received {type(self.children).__name__}")
        if self.depth < 1:
            raise ValueError(f"depth must be >= 1, received {self.depth}")
        if self.children < 0:
            raise ValueError(f"children must be >= 0, received {self.children}")

    def __str__(self) -> str:
        return f"{self.depth}:{self.children}"


Schedule = Tuple[FanOutLevel, ...]
LevelLike = Union[FanOutLevel, str, Sequence[int]]

# -----------------------------------------------------------------------------
# PARSING API
# -----------------------------------------------------------------------------

def parse_level(value: LevelLike) -> FanOutLevel:
    """
    Build a FanOutLevel from its textual or pair representation.

    Accepted forms: "3:1000", (3, 1000), [3, 1000] or an existing level.

    Raises:
        ValueError: If the value is malformed or out of range.
    """
    if isinstance(value, FanOutLevel):
        return value

    if isinstance(value, str):
        depth_s, sep, count_s = value.strip().partition(":")
        if not sep:
            raise ValueError(f"Invalid level '{value}': expected DEPTH:COUNT.")
        try:
            return FanOutLevel(int(depth_s.strip()), int(count_s.strip()))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid level '{value}': {e}") from e

    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return FanOutLevel(int(value[0]), int(value[1]))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid level {value!r}: {e}") from e

    raise ValueError(f"Invalid level {value!r}: expected 'DEPTH:COUNT' or a pair.")


def parse_schedule(value: Union[str, Iterable[LevelLike]]) -> Schedule:
    """
    Parse a full schedule.

    Args:
        value: Comma-separated "DEPTH:COUNT" string, or an iterable of
               anything accepted by parse_level.

    Returns:
        Schedule: Ordered tuple of levels. An empty string yields ().
    """
    if isinstance(value, str):
        parts = [p for p in (x.strip() for x in value.split(",")) if p]
        return tuple(parse_level(p) for p in parts)
    return tuple(parse_level(v) for v in value)


def format_schedule(schedule: Iterable[FanOutLevel]) -> str:
    """Render a schedule back to its comma-separated textual form."""
    return ",".join(str(level) for level in schedule)

# -----------------------------------------------------------------------------
# SHAPE PROJECTION
# -----------------------------------------------------------------------------

def directories_per_level(schedule: Sequence[FanOutLevel]) -> List[int]:
    """
    Compute how many directories each schedule level will create.

    The count at a level is the product of the child counts of that level and
    every level before it. A zero anywhere stops all deeper levels.
    """
    counts: List[int] = []
    running = 1
    for level in schedule:
        running *= level.children
        counts.append(running)
    return counts


def project_totals(schedule: Sequence[FanOutLevel], files_per_dir: int) -> Tuple[int, int]:
    """
    Project total directories (root included) and placeholder files.

    Returns:
        Tuple[int, int]: (directories, files).
    """
    directories = 1 + sum(directories_per_level(schedule))
    return directories, directories * files_per_dir
