"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

import yaml

from viewdirective.core.exceptions import SettingsError


def load_host_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load host settings from ``--config`` and apply ``--strict``.

    Raises:
        SettingsError: If the config file is not valid YAML or not a mapping
    """
    config: Dict[str, Any] = {}
    config_path = getattr(args, "config", None)
    if config_path:
        try:
            data = yaml.safe_load(Path(config_path).read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise SettingsError(
                f"Invalid YAML in config file {config_path}: {exc}",
                context={"path": str(config_path)},
            ) from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError(
                f"Config file must contain a mapping: {config_path}",
                context={"path": str(config_path)},
            )
        config.update(data)
    if getattr(args, "strict", False):
        config["strict"] = True
    return config


def resource_name(args: argparse.Namespace) -> str:
    """Build the resource name, appending ``--set`` values as a settings suffix."""
    settings = [item for item in getattr(args, "settings", []) if item]
    if not settings:
        return args.view
    return f"{args.view}!{';'.join(settings)}"


__all__ = ["load_host_config", "resource_name"]
