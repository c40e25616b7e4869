"""Common argument registration helpers for CLI commands."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_view_args(parser: argparse.ArgumentParser) -> None:
    """Add the view path and the settings flags shared by view commands."""
    parser.add_argument(
        "view",
        help="View name relative to --root (default extension applied when missing)",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Directory views and dependencies are resolved against (default: .)",
    )
    parser.add_argument(
        "--config",
        help="YAML file with host settings (e.g. cssLoader, directiveTag)",
    )
    parser.add_argument(
        "--set",
        dest="settings",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Override a setting for this call (repeatable)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unterminated directive tags",
    )


__all__ = ["add_json_flag", "add_view_args"]
