"""
viewdirective CLI package.

Provides the command-line interface with auto-discovery of commands
from the commands/ folder.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import add_json_flag, add_view_args
from ._utils import load_host_config, resource_name

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_view_args",
    "load_host_config",
    "resource_name",
]
