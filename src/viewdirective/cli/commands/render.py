"""
viewdirective render command.

SUMMARY: Resolve a view and print the final document
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from viewdirective.cli import (
    OutputFormatter,
    add_json_flag,
    add_view_args,
    load_host_config,
    resource_name,
)
from viewdirective.core.engine import resolve_async
from viewdirective.core.exceptions import ViewDirectiveError
from viewdirective.core.loaders import FileSystemLoader

SUMMARY = "Resolve a view and print the final document"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_view_args(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Resolve the view with a filesystem loader rooted at --root."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        host_config = load_host_config(args)
        loader = FileSystemLoader(Path(args.root), host_config=host_config)
        document = asyncio.run(resolve_async(resource_name(args), loader, host_config))
    except (ViewDirectiveError, OSError) as e:
        formatter.error(e, error_code="render_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({
            "view": args.view,
            "document": document,
            "stylesheets": loader.stylesheets,
        })
    else:
        formatter.text(document)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
