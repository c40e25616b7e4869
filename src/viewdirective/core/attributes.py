"""Attribute extraction for directive tags.

Turns the raw attribute text of a tag (everything between ``<name `` and the
closing ``>``) into a mapping of lower-cased attribute names to string values.
Supports double-quoted, single-quoted, unquoted and bare (valueless)
attributes. Entities are not decoded.
"""
from __future__ import annotations

import re
from typing import Dict

ATTRIBUTE_PATTERN = re.compile(
    r"""
    (?P<name> [^\s"'<>/=]+ )
    (?:
        \s* = \s*
        (?:
            " (?P<double> [^"]* ) "
            |
            ' (?P<single> [^']* ) '
            |
            (?P<bare> [^\s"'=<>`]+ )
        )
    )?
    """,
    re.VERBOSE,
)


def extract_attributes(text: str) -> Dict[str, str]:
    """Extract attributes from a tag's inner text.

    Later duplicates of the same attribute are ignored, as browsers do.
    A trailing self-closing ``/`` is skipped.

    Args:
        text: Attribute text, e.g. ``rel="stylesheet" href="a.css"``

    Returns:
        Dict mapping lower-cased attribute name to its raw value
        (empty string for valueless attributes)
    """
    attributes: Dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(text):
        name = match.group("name").lower()
        if name in attributes:
            continue
        for group in ("double", "single", "bare"):
            value = match.group(group)
            if value is not None:
                break
        else:
            value = ""
        attributes[name] = value
    return attributes


__all__ = ["extract_attributes"]
