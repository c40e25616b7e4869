"""Result types and hook contracts for directive processing.

Every stage of directive processing is a plain callable held in the settings
(``findTag``, ``filterTag``, ``processIf``, ``processTag``, ``parse``,
``extractAttributes``). The protocols below describe what a replacement hook
must accept and return.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Union

if TYPE_CHECKING:
    from viewdirective.core.settings import Settings


@dataclass(frozen=True)
class FoundTag:
    """A candidate directive tag located by the scanner.

    Attributes:
        name: Tag name, e.g. ``link``
        position: Index of the tag's ``<``
        tag_start: Matched opening sequence, e.g. ``"<link "``
    """

    name: str
    position: int
    tag_start: str


@dataclass(frozen=True)
class Inclusion:
    """An inclusion whose resolved content replaces its placeholder."""

    name: str
    data: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class DirectiveResult:
    """Outcome of classifying one tag.

    ``text`` replaces the original tag span; an empty string deletes it.
    """

    dependency: Union[None, str, List[str]] = None
    inclusion: Optional[Inclusion] = None
    text: str = ""

    @property
    def dependencies(self) -> List[str]:
        """Dependencies as a list (a single identifier becomes one element)."""
        if self.dependency is None:
            return []
        if isinstance(self.dependency, str):
            return [self.dependency]
        return list(self.dependency)

    @classmethod
    def deletion(cls) -> "DirectiveResult":
        """Result that removes the tag and contributes nothing."""
        return cls()


@dataclass
class ParseResult:
    """Output of the parse engine.

    Attributes:
        resource: Rewritten document
        dependencies: Deduplicated identifiers in first-occurrence order
        inclusions: Inclusion registry keyed by identifier, or None if empty
    """

    resource: str
    dependencies: List[str] = field(default_factory=list)
    inclusions: Optional[Dict[str, Inclusion]] = None


@dataclass(frozen=True)
class ConditionRequest:
    """Everything a ``processIf`` hook may use to decide on an inclusion."""

    condition: str
    attributes: Dict[str, str]
    resource: str
    tag_text: str
    settings: "Settings"


class TagFinder(Protocol):
    def __call__(self, text: str, start: int, settings: "Settings") -> Optional[FoundTag]:
        ...


class TagFilter(Protocol):
    def __call__(self, tag_text: str, attributes: Dict[str, str], settings: "Settings") -> bool:
        ...


class TagProcessor(Protocol):
    def __call__(
        self, tag_text: str, attributes: Dict[str, str], settings: "Settings"
    ) -> Optional[DirectiveResult]:
        ...


class ConditionProcessor(Protocol):
    def __call__(self, request: ConditionRequest) -> bool:
        ...


class Parser(Protocol):
    def __call__(self, text: str, settings: "Settings") -> Union[ParseResult, str]:
        ...


__all__ = [
    "FoundTag",
    "Inclusion",
    "DirectiveResult",
    "ParseResult",
    "ConditionRequest",
    "TagFinder",
    "TagFilter",
    "TagProcessor",
    "ConditionProcessor",
    "Parser",
]
