from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, optional JSON file, command-line overrides), the generation run
and result rendering.

Exit codes:
    0   Full success.
    1   Filesystem or version-control failure.
    2   Invalid configuration or refused pre-flight check.
    130 Interrupted by the user.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from repogen.core.pipeline.engine import run_generation
from repogen.core.pipeline.validator import validate_config
from repogen.domain.config import load_config
from repogen.domain.generation_models import GenerationResult
from repogen.domain.schedule import format_schedule
from repogen.infra.logging import LoggingConfig, configure_logging, get_logger
from repogen.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# Error kinds that stem from the request rather than the run itself
_USAGE_ERROR_KINDS = ("preflight",)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    try:
        return _execute(argv)
    except KeyboardInterrupt:
        msg = "Interrupted by user. Anything generated so far is left in place, uncommitted."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED


def _execute(argv: Optional[List[str]]) -> int:
    """Run the parse, configure, generate and render phases."""
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(
        LoggingConfig(level=log_level, console=True, log_file=args.log_file),
        force=True,
    )

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults + optional file) and overrides
    try:
        base_conf = load_config(args.config_file)
        raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
        clean_conf, _ = validate_config(raw_conf, strict=True)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.dump_config:
        print(json.dumps(_serializable_config(clean_conf), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Generation phase
    result = run_generation(
        clean_conf,
        dry_run=bool(args.dry_run),
        force=bool(args.force),
        verify=bool(args.verify),
    )

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    if result.error_kind in _USAGE_ERROR_KINDS:
        return EXIT_USAGE
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay non-None overrides on the base configuration.

    Args:
        base: Configuration resolved so far.
        overrides: Command-line values.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _serializable_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(cfg)
    out["schedule"] = format_schedule(cfg["schedule"])
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: GenerationResult) -> None:
    """
    Print the run result for a terminal reader.

    Args:
        result: The generation result to render.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        if result.directories or result.files:
            print(
                f"Partial tree left in place: {result.directories:,} directories, "
                f"{result.files:,} files at {result.root_path}",
                file=sys.stderr,
            )
        return

    if result.dry_run:
        print("DRY RUN: nothing was written.")
        print(f"Target root: {result.root_path}")
        print(f"Schedule: {result.schedule or '(root only)'}")
        print(f"Projected directories: {result.directories:,}")
        print(f"Projected files: {result.files:,}")
        return

    print(f"Repository creation complete at {result.root_path}")
    print(f"Directories created: {result.directories:,}")
    print(f"Files created: {result.files:,}")

    for depth in sorted(result.directories_per_depth):
        print(f"  - depth {depth}: {result.directories_per_depth[depth]:,}")

    if result.commit_hash:
        print(f"Snapshot commit: {result.commit_hash}")
    else:
        print("Snapshot commit: skipped")

    verify = result.summary.get("verify")
    if verify:
        print(
            f"Verified: {verify['commits']} commit(s), "
            f"{verify['tracked_files']:,} tracked files"
        )
        if not verify["all_files_tracked"]:
            print(f"WARNING: {verify['missing_files']:,} generated file(s) not tracked", file=sys.stderr)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
