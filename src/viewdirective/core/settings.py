"""Layered settings for view directive resolution.

Settings are built fresh for every resolution call from three layers, later
layers winning (shallow merge):

1. process-wide defaults (bundled ``data/config/defaults.yaml`` plus the
   built-in hook implementations)
2. host config passed by the caller
3. overrides parsed from the resource name suffix (``name=value;name=value``)

The process-wide defaults are replaced copy-on-write under a lock, so a call
that has already built its settings never observes a later ``reconfig``.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from viewdirective.core.directives.base import (
    ConditionProcessor,
    Parser,
    TagFilter,
    TagFinder,
    TagProcessor,
)
from viewdirective.core.exceptions import SettingsError
from viewdirective.data import read_yaml

logger = logging.getLogger(__name__)

# Settings whose values are functions; never settable from a suffix string.
HOOK_KEYS: Tuple[str, ...] = (
    "findTag",
    "filterTag",
    "processIf",
    "processTag",
    "parse",
    "extractAttributes",
)

_lock = threading.Lock()
_defaults: Optional[Dict[str, Any]] = None


def _builtin_defaults() -> Dict[str, Any]:
    """Bundled primitive defaults plus the built-in hooks."""
    from viewdirective.core.attributes import extract_attributes
    from viewdirective.core.directives.classifier import filter_tag, process_tag
    from viewdirective.core.directives.conditionals import process_if
    from viewdirective.core.directives.parser import parse
    from viewdirective.core.directives.scanner import find_next_tag

    values = dict(read_yaml("config", "defaults.yaml"))
    values["directiveTag"] = list(values.get("directiveTag") or [])
    values.update(
        findTag=find_next_tag,
        filterTag=filter_tag,
        processIf=process_if,
        processTag=process_tag,
        parse=parse,
        extractAttributes=extract_attributes,
    )
    return values


def get_defaults() -> Dict[str, Any]:
    """Return a copy of the process-wide default settings."""
    global _defaults
    with _lock:
        if _defaults is None:
            _defaults = _builtin_defaults()
        return _copy_values(_defaults)


def replace_default(key: str, value: Any) -> None:
    """Replace a single process-wide default.

    Example:
        >>> replace_default("cssLoader", "link")
    """
    reconfig({key: value})


def reconfig(values: Mapping[str, Any]) -> None:
    """Replace several process-wide defaults at once."""
    global _defaults
    with _lock:
        current = _defaults if _defaults is not None else _builtin_defaults()
        updated = _copy_values(current)
        updated.update(values)
        _defaults = updated
    logger.debug("Default settings replaced: %s", sorted(values))


def reset_defaults() -> None:
    """Restore the bundled defaults."""
    global _defaults
    with _lock:
        _defaults = None


def to_bool(value: Any) -> bool:
    """Coerce a settings value to bool: ``"false"`` (any case) and ``0`` are false."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() != "false"
    return value != 0


def _copy_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    copied = dict(values)
    for key, value in copied.items():
        if isinstance(value, list):
            copied[key] = list(value)
    return copied


def parse_settings_string(text: str) -> Dict[str, Any]:
    """Parse a ``name=value;name=value`` settings suffix.

    Whitespace around names and values is stripped and empty items are
    skipped. A bare ``name`` means ``name=true``.

    Args:
        text: Settings suffix without the leading ``!``

    Returns:
        Dict of raw (string) values
    """
    values: Dict[str, Any] = {}
    for item in text.split(";"):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        name = name.strip()
        if not name:
            continue
        values[name] = value.strip() if sep else "true"
    return values


def convert_settings(
    values: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Coerce settings values to the type of the corresponding default.

    Booleans: ``"false"`` (any case) and ``0`` are false, anything else true.
    Numbers use the default's numeric type. Hook settings are dropped with a
    warning. Unknown keys pass through unchanged.

    Raises:
        SettingsError: If a numeric value cannot be converted
    """
    if defaults is None:
        defaults = get_defaults()

    converted: Dict[str, Any] = {}
    for name, value in values.items():
        if name in HOOK_KEYS:
            logger.warning("Setting %r cannot be set from a resource name; ignored", name)
            continue
        if name not in defaults:
            converted[name] = value
            continue

        default = defaults[name]
        if isinstance(default, bool):
            value = to_bool(value)
        elif isinstance(default, (int, float)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                try:
                    value = type(default)(value)
                except (TypeError, ValueError) as exc:
                    raise SettingsError(
                        f"Setting {name!r} expects a number, got {value!r}",
                        context={"setting": name, "value": value},
                    ) from exc
        elif isinstance(default, list) and isinstance(value, str):
            logger.debug("Setting %r given as a single value: %r", name, value)
        converted[name] = value
    return converted


class Settings(Mapping[str, Any]):
    """Immutable settings for one resolution call.

    Keys are the camelCase option names (``cssLoader``, ``directiveTag``, ...).
    Properties give snake_case access to the recognized options and hooks.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values: Dict[str, Any] = dict(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        shown = {k: v for k, v in self._values.items() if k not in HOOK_KEYS}
        return f"Settings({shown!r})"

    @property
    def css_loader(self) -> str:
        return self._values["cssLoader"]

    @property
    def default_ext(self) -> str:
        return self._values["defaultExt"]

    @property
    def default_inclusion_ext(self) -> str:
        return self._values["defaultInclusionExt"]

    @property
    def directive_tags(self) -> Tuple[str, ...]:
        """Configured directive tag names; a single string counts as one name."""
        tags = self._values["directiveTag"]
        if isinstance(tags, str):
            return (tags,)
        return tuple(tags)

    @property
    def inclusion_loader(self) -> str:
        return self._values["inclusionLoader"]

    @property
    def strict(self) -> bool:
        return to_bool(self._values.get("strict", False))

    @property
    def find_tag(self) -> TagFinder:
        return self._values["findTag"]

    @property
    def filter_tag(self) -> TagFilter:
        return self._values["filterTag"]

    @property
    def process_if(self) -> ConditionProcessor:
        return self._values["processIf"]

    @property
    def process_tag(self) -> TagProcessor:
        return self._values["processTag"]

    @property
    def parse(self) -> Parser:
        return self._values["parse"]

    @property
    def extract_attributes(self) -> Callable[[str], Dict[str, str]]:
        return self._values["extractAttributes"]

    def get_path(self, path: str) -> Any:
        """Get a settings value by dot-separated path.

        Args:
            path: Dot-separated path like 'features.auth'

        Returns:
            The value or None if not found
        """
        current: Any = self._values
        for part in path.split("."):
            if isinstance(current, Mapping):
                current = current.get(part)
            else:
                return None
            if current is None:
                return None
        return current


def build_settings(
    host_config: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """Layer defaults, host config and suffix overrides into new settings.

    Args:
        host_config: Caller-supplied configuration (may contain hooks)
        overrides: Values parsed from a resource-name suffix; coerced against
            the defaults before layering

    Returns:
        Settings for a single resolution call
    """
    defaults = get_defaults()
    layered = dict(defaults)
    layered.update(host_config or {})
    if overrides:
        layered.update(convert_settings(overrides, defaults))
    return Settings(layered)


__all__ = [
    "HOOK_KEYS",
    "Settings",
    "build_settings",
    "convert_settings",
    "get_defaults",
    "parse_settings_string",
    "reconfig",
    "replace_default",
    "reset_defaults",
    "to_bool",
]
