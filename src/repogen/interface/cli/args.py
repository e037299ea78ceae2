from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides. Options left unset map to None so they never
shadow values coming from a config file.
"""

import argparse
from typing import Any, Dict, List, Optional

from repogen.domain.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_FILES_PER_DIR,
    DEFAULT_ROOT_PATH,
    DEFAULT_SCHEDULE,
)
from repogen.domain.schedule import format_schedule, parse_schedule

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the repogen CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    default_schedule = format_schedule(parse_schedule(DEFAULT_SCHEDULE))

    p = argparse.ArgumentParser(
        prog="repogen",
        description=(
            "Generate a synthetic directory tree of placeholder files from a "
            "fan-out schedule and commit it to a fresh git repository."
        ),
    )

    # --- Tree Shape ---
    p.add_argument(
        "-o", "--root",
        dest="root_path",
        default=None,
        help=f"Output root directory (default: {DEFAULT_ROOT_PATH}).",
    )
    p.add_argument(
        "-n", "--files-per-dir",
        dest="files_per_dir",
        type=int,
        default=None,
        help=f"Placeholder files written into every directory (default: {DEFAULT_FILES_PER_DIR}).",
    )
    p.add_argument(
        "--schedule",
        default=None,
        help=f"Comma-separated DEPTH:COUNT fan-out list (default: {default_schedule}).",
    )
    p.add_argument(
        "--level",
        dest="levels",
        action="append",
        default=None,
        metavar="DEPTH:COUNT",
        help="Add one fan-out level; repeat in order. Replaces --schedule.",
    )

    # --- Snapshot Commit ---
    p.add_argument(
        "-m", "--message",
        dest="commit_message",
        default=None,
        help=f"Commit message (default: '{DEFAULT_COMMIT_MESSAGE}').",
    )
    p.add_argument(
        "--no-commit",
        action="store_true",
        help="Generate the tree only; skip git init, staging and commit.",
    )
    p.add_argument("--author-name", dest="author_name", default=None, help="Commit author name.")
    p.add_argument("--author-email", dest="author_email", default=None, help="Commit author email.")

    # --- Runtime Constraints and Safety ---
    p.add_argument(
        "--max-entries",
        dest="max_entries",
        type=int,
        default=None,
        help="Refuse to run if projected directories + files exceed N (0 disables).",
    )
    p.add_argument(
        "--force",
        action="store_true",
        help="Generate into a root directory that is not empty.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the projected shape without writing anything.",
    )
    p.add_argument(
        "--verify",
        action="store_true",
        help="Read the commit back after the run and report tracked-file counts.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file; command-line options take precedence.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides (None means "not given").
    """
    overrides: Dict[str, Any] = {}

    overrides["root_path"] = args.root_path
    overrides["files_per_dir"] = args.files_per_dir
    overrides["commit_message"] = args.commit_message
    overrides["author_name"] = args.author_name
    overrides["author_email"] = args.author_email
    overrides["max_entries"] = args.max_entries

    # --level wins over --schedule; both stay raw for the validator
    if args.levels:
        overrides["schedule"] = list(args.levels)
    else:
        overrides["schedule"] = _split_csv(args.schedule)

    if args.no_commit:
        overrides["commit"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
