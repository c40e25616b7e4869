"""Tag scanner: locate the next candidate directive tag."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .base import FoundTag

if TYPE_CHECKING:
    from viewdirective.core.settings import Settings


def find_next_tag(text: str, start: int, settings: "Settings") -> Optional[FoundTag]:
    """Find the leftmost configured directive tag at or after ``start``.

    A tag matches on the literal ``"<" + name + " "``, so tags without
    attributes never match. On a tie the name listed first wins.

    Args:
        text: Document text
        start: Position to search from
        settings: Settings providing ``directiveTag``

    Returns:
        FoundTag or None when no configured tag occurs again
    """
    found: Optional[FoundTag] = None
    for name in settings.directive_tags:
        tag_start = f"<{name} "
        position = text.find(tag_start, start)
        if position > -1 and (found is None or position < found.position):
            found = FoundTag(name=name, position=position, tag_start=tag_start)
    return found


__all__ = ["find_next_tag"]
