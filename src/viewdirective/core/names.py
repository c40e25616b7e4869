"""Identifier helpers: loader prefixes, settings suffixes and extensions.

An identifier has the form ``[loader!]path[.ext]``. A resource name handed to
the engine may additionally carry a settings suffix after its first ``!``::

    some/folder/view!cssLoader=link;defaultExt=htm
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

# Explicit loader prefix such as "css!" or "view!"
LOADER_PREFIX_PATTERN = re.compile(r"^\w+!")

INCLUSION_START = '<link rel="x-include" href="'
INCLUSION_END = '">'


def has_loader_prefix(name: str) -> bool:
    """Return True if ``name`` starts with an explicit ``loader!`` prefix."""
    return bool(LOADER_PREFIX_PATTERN.match(name))


def split_loader_prefix(name: str) -> Tuple[Optional[str], str]:
    """Split ``loader!path`` into ``(loader, path)``.

    Returns ``(None, name)`` when there is no explicit prefix.
    """
    if not has_loader_prefix(name):
        return None, name
    loader, _, path = name.partition("!")
    return loader, path


def split_resource_name(resource_name: str) -> Tuple[str, Optional[str]]:
    """Split a resource name at its first ``!`` into name and settings suffix."""
    name, sep, suffix = resource_name.partition("!")
    if not sep:
        return resource_name, None
    return name, suffix


def name_with_ext(name: str, ext: Optional[str]) -> str:
    """Append ``.ext`` to ``name`` unless its last path segment has an extension.

    Args:
        name: Identifier, optionally with a loader prefix
        ext: Extension without the leading dot; empty means leave as is

    Returns:
        Name with extension

    Example:
        >>> name_with_ext("view!parts/head", "html")
        'view!parts/head.html'
        >>> name_with_ext("view!parts/head.tpl", "html")
        'view!parts/head.tpl'
    """
    if not ext:
        return name
    _, path = split_loader_prefix(name)
    segment = path.rsplit("/", 1)[-1]
    if "." in segment.lstrip("."):
        return name
    return f"{name}.{ext}"


def placeholder_for(identifier: str) -> str:
    """Build the placeholder marker written in place of a resolved inclusion."""
    return f"{INCLUSION_START}{identifier}{INCLUSION_END}"


__all__ = [
    "LOADER_PREFIX_PATTERN",
    "INCLUSION_START",
    "INCLUSION_END",
    "has_loader_prefix",
    "split_loader_prefix",
    "split_resource_name",
    "name_with_ext",
    "placeholder_for",
]
