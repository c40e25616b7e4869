"""Parse engine: one left-to-right pass over a view document.

Finds directive tags with the ``findTag`` hook, extracts their attributes with
``extractAttributes``, classifies them with ``processTag`` and rewrites the
document. Text produced by a replacement is never scanned again, so an
inclusion placeholder is not itself treated as a directive in the same pass.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Set

from viewdirective.core.exceptions import UnterminatedTagError

from .base import Inclusion, ParseResult

if TYPE_CHECKING:
    from viewdirective.core.settings import Settings

logger = logging.getLogger(__name__)

TAG_END = ">"


def parse(text: str, settings: "Settings") -> ParseResult:
    """Parse a document and collect its directives.

    Args:
        text: Document text
        settings: Active settings providing the hooks

    Returns:
        ParseResult with the rewritten document, the deduplicated dependency
        list and the inclusion registry (None when there are no inclusions)

    Raises:
        UnterminatedTagError: In strict mode, for a tag with no closing ``>``
    """
    find_tag = settings.find_tag
    extract_attributes = settings.extract_attributes
    process_tag = settings.process_tag

    pieces: List[str] = []
    dependencies: List[str] = []
    seen: Set[str] = set()
    inclusions: Dict[str, Inclusion] = {}

    cursor = 0
    found = find_tag(text, cursor, settings)
    while found is not None:
        start = found.position
        start_len = len(found.tag_start)
        end = text.find(TAG_END, start + start_len)

        if end == -1:
            if settings.strict:
                raise UnterminatedTagError(
                    f"Unterminated <{found.name}> tag at position {start}",
                    context={"tag": found.name, "position": start},
                )
            logger.debug("Unterminated <%s> tag at %d; scanning stopped", found.name, start)
            break

        if end == start:
            pieces.append(text[cursor:end + 1])
            cursor = end + 1
            found = find_tag(text, cursor, settings)
            continue

        end += len(TAG_END)
        tag_text = text[start:end]
        attributes = extract_attributes(tag_text[start_len:-len(TAG_END)])
        result = process_tag(tag_text, attributes, settings)

        pieces.append(text[cursor:start])
        if result is None:
            pieces.append(tag_text)
        else:
            inclusion = result.inclusion
            if inclusion is not None and inclusion.name not in inclusions:
                inclusions[inclusion.name] = inclusion
                logger.debug("Inclusion found: %s", inclusion.name)

            for name in result.dependencies:
                if not name:
                    logger.debug("Empty dependency from %s ignored", tag_text)
                    continue
                if name not in seen:
                    seen.add(name)
                    dependencies.append(name)
                    logger.debug("Dependency found: %s", name)

            pieces.append(result.text)
        cursor = end

        found = find_tag(text, cursor, settings)

    pieces.append(text[cursor:])
    return ParseResult(
        resource="".join(pieces),
        dependencies=dependencies,
        inclusions=inclusions or None,
    )


__all__ = ["parse"]
