"""Directive classifier.

Decides what a directive tag means and what replaces it in the document::

    <link rel="stylesheet|css" href="[loader!]path/style.css">
    <link rel="require|x-require" [type="loader"] href="[loader!]path">
    <link rel="include|x-include" [type="loader"] href="[loader!]path[.ext]"
          [data-if="condition"] [data-name="value"]...>

The following directives are equivalent with the default settings:

    <link rel="stylesheet" href="path/style.css">
    <x-link rel="css" href="css!path/style.css">
    <link rel="x-require" href="css!path/style.css">
    <x-link rel="require" type="css" href="path/style.css">
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Optional

from viewdirective.core.names import has_loader_prefix, name_with_ext, placeholder_for

from .base import ConditionRequest, DirectiveResult, Inclusion

if TYPE_CHECKING:
    from viewdirective.core.settings import Settings

logger = logging.getLogger(__name__)

STYLE = "style"
DEPENDENCY = "dependency"
INCLUSION = "inclusion"

# rel attribute value (lower-cased) -> directive kind
KIND_BY_REL: Dict[str, str] = {
    "stylesheet": STYLE,
    "css": STYLE,
    "require": DEPENDENCY,
    "x-require": DEPENDENCY,
    "include": INCLUSION,
    "x-include": INCLUSION,
}

DATA_PREFIX = "data-"
CONDITION_ATTRIBUTE = "data-if"


def directive_kind(attributes: Dict[str, str]) -> Optional[str]:
    """Return the directive kind named by the ``rel`` attribute, if any."""
    rel = attributes.get("rel")
    if not rel:
        return None
    return KIND_BY_REL.get(rel.lower())


def filter_tag(tag_text: str, attributes: Dict[str, str], settings: "Settings") -> bool:
    """Return True if the tag is a directive worth processing.

    A directive needs a non-empty ``href`` and a recognized ``rel``.
    """
    return bool(attributes.get("href")) and directive_kind(attributes) is not None


def collect_data(attributes: Dict[str, str]) -> Optional[Dict[str, str]]:
    """Collect ``data-`` attributes into a payload keyed by suffix name.

    Returns None when the tag has no ``data-`` attributes.
    """
    data = {
        name[len(DATA_PREFIX):]: value
        for name, value in attributes.items()
        if name.startswith(DATA_PREFIX)
    }
    return data or None


def process_tag(tag_text: str, attributes: Dict[str, str], settings: "Settings") -> DirectiveResult:
    """Classify a directive tag.

    Args:
        tag_text: Entire tag text, from ``<`` to ``>``
        attributes: Tag attributes
        settings: Active settings (``filterTag`` and ``processIf`` hooks,
            loader and extension defaults)

    Returns:
        DirectiveResult describing dependencies, inclusion and replacement
        text. Tags rejected by ``filterTag`` and inclusions whose condition
        fails yield the deletion result.
    """
    if not settings.filter_tag(tag_text, attributes, settings):
        return DirectiveResult.deletion()

    href = attributes["href"]
    kind = directive_kind(attributes)
    explicit = has_loader_prefix(href)

    if kind == STYLE:
        name = href if explicit else f"{settings.css_loader}!{href}"
        return DirectiveResult(dependency=name)

    if kind == DEPENDENCY:
        loader = attributes.get("type")
        name = f"{loader}!{href}" if loader and not explicit else href
        return DirectiveResult(dependency=name)

    if kind == INCLUSION:
        condition = attributes.get(CONDITION_ATTRIBUTE)
        if condition is not None:
            request = ConditionRequest(
                condition=condition,
                attributes=attributes,
                resource=href,
                tag_text=tag_text,
                settings=settings,
            )
            if not settings.process_if(request):
                logger.debug("Inclusion %s dropped by condition %r", href, condition)
                return DirectiveResult.deletion()

        name = href
        if not explicit:
            name = f"{attributes.get('type') or settings.inclusion_loader}!{href}"
        name = name_with_ext(name, settings.default_inclusion_ext)
        return DirectiveResult(
            dependency=name,
            inclusion=Inclusion(name=name, data=collect_data(attributes)),
            text=placeholder_for(name),
        )

    # A replaced filterTag hook may accept rel values this classifier does not know.
    logger.debug("No directive kind for accepted tag %s", tag_text)
    return DirectiveResult.deletion()


__all__ = [
    "KIND_BY_REL",
    "STYLE",
    "DEPENDENCY",
    "INCLUSION",
    "collect_data",
    "directive_kind",
    "filter_tag",
    "process_tag",
]
