"""
viewdirective scan command.

SUMMARY: List the dependencies and inclusions of a view without loading them
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from viewdirective.cli import (
    OutputFormatter,
    add_json_flag,
    add_view_args,
    load_host_config,
    resource_name,
)
from viewdirective.core.engine import parse_view, settings_for
from viewdirective.core.exceptions import ViewDirectiveError
from viewdirective.core.loaders import FileSystemLoader
from viewdirective.core.names import name_with_ext

SUMMARY = "List the dependencies and inclusions of a view without loading them"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_view_args(parser)
    add_json_flag(parser)
    parser.add_argument(
        "--document",
        action="store_true",
        help="Also print the rewritten document (text mode)",
    )


def main(args: argparse.Namespace) -> int:
    """Run the parse phase only and report what it found."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        host_config = load_host_config(args)
        name, settings = settings_for(resource_name(args), host_config)
        loader = FileSystemLoader(Path(args.root), host_config=host_config)
        parsed = parse_view(loader.load_text(name_with_ext(name, settings.default_ext)), settings)
    except (ViewDirectiveError, OSError) as e:
        formatter.error(e, error_code="scan_error")
        return 1

    inclusions = {
        inclusion_name: inclusion.data or {}
        for inclusion_name, inclusion in (parsed.inclusions or {}).items()
    }

    if formatter.json_mode:
        formatter.json_output({
            "view": args.view,
            "dependencies": parsed.dependencies,
            "inclusions": inclusions,
            "document": parsed.resource,
        })
        return 0

    formatter.text(f"Dependencies ({len(parsed.dependencies)}):")
    for dependency in parsed.dependencies:
        marker = " [inclusion]" if dependency in inclusions else ""
        formatter.text(f"  {dependency}{marker}")
    for inclusion_name, data in inclusions.items():
        if data:
            formatter.text(f"  {inclusion_name} data: {data}")
    if args.document:
        formatter.text("")
        formatter.text(parsed.resource)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
