from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Schedule handling via --schedule and repeated --level.
3. Unset options map to None so they never shadow file config.
"""

import pytest

from repogen.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_shape_arguments():
    """Verify root, file count and schedule are captured."""
    args = parse_args([
        "-o", "/tmp/out",
        "-n", "3",
        "--schedule", "2:4, 3:2",
    ])

    overrides = args_to_overrides(args)

    assert overrides["root_path"] == "/tmp/out"
    assert overrides["files_per_dir"] == 3
    assert overrides["schedule"] == ["2:4", "3:2"]


def test_cli_repeated_levels_win_over_schedule():
    args = parse_args([
        "--schedule", "2:9",
        "--level", "2:1",
        "--level", "3:5",
    ])

    overrides = args_to_overrides(args)

    assert overrides["schedule"] == ["2:1", "3:5"]


def test_cli_commit_flags():
    args = parse_args([
        "--no-commit",
        "-m", "snapshot",
        "--author-name", "Bot",
        "--author-email", "bot@example.com",
    ])

    overrides = args_to_overrides(args)

    assert overrides["commit"] is False
    assert overrides["commit_message"] == "snapshot"
    assert overrides["author_name"] == "Bot"
    assert overrides["author_email"] == "bot@example.com"


def test_cli_runtime_flags():
    args = parse_args(["--dry-run", "--force", "--verify", "--json", "--debug", "--max-entries", "500"])

    assert args.dry_run is True
    assert args.force is True
    assert args.verify is True
    assert args.json_output is True
    assert args.debug is True
    assert args_to_overrides(args)["max_entries"] == 500


def test_cli_defaults_are_none_in_overrides():
    """
    Verify that unset options stay None.
    The merge logic in app.py only applies non-None values.
    """
    overrides = args_to_overrides(parse_args([]))

    for key in ("root_path", "files_per_dir", "schedule", "commit_message", "max_entries"):
        assert overrides[key] is None
    assert "commit" not in overrides


def test_cli_rejects_non_integer_file_count():
    with pytest.raises(SystemExit):
        parse_args(["-n", "many"])
