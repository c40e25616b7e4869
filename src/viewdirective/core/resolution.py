"""Resolution and substitution phase.

Once the parse engine has produced a document and its dependency list, the
whole batch is requested from the host loader in one call. Each inclusion's
fetched value is then rendered and written over every occurrence of its
placeholder.

Fetched values may be:
- a plain value: stringified as is
- a callable: called with the inclusion's ``data`` (or no arguments)
- an object with a callable ``execute``: called the same way

Rendered content is not scanned for further placeholders. If one inclusion's
output contains another inclusion's placeholder, the result depends on the
substitution order (registry insertion order) and is not supported.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Dict, Mapping, Optional, Protocol, Sequence, Union

from viewdirective.core.directives.base import ParseResult
from viewdirective.core.exceptions import ResolutionError, ViewDirectiveError
from viewdirective.core.names import placeholder_for

logger = logging.getLogger(__name__)


class ResourceLoader(Protocol):
    """Host loading capability.

    Either method may return its value directly or as an awaitable.
    """

    def load_text(self, name: str) -> Union[str, Awaitable[str]]:
        ...

    def require(self, names: Sequence[str]) -> Union[Sequence[Any], Awaitable[Sequence[Any]]]:
        ...


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it."""
    if inspect.isawaitable(value):
        return await value
    return value


def stringify(value: Any) -> str:
    """Convert a rendered inclusion to text; None becomes the empty string."""
    if value is None:
        return ""
    return str(value)


async def render_inclusion(value: Any, data: Optional[Mapping[str, str]] = None) -> str:
    """Render a fetched inclusion value to text.

    Args:
        value: Value delivered by the loader
        data: ``data-`` payload of the inclusion directive, if any

    Returns:
        Rendered text
    """
    args = [dict(data)] if data is not None else []
    if callable(value):
        result = value(*args)
    elif callable(getattr(value, "execute", None)):
        result = value.execute(*args)
    else:
        result = value
    return stringify(await maybe_await(result))


async def complete_resolution(parsed: ParseResult, loader: ResourceLoader) -> str:
    """Load a parsed document's dependencies and substitute its inclusions.

    Args:
        parsed: Output of the parse engine
        loader: Host loading capability

    Returns:
        Final document

    Raises:
        ResolutionError: If any dependency cannot be fetched or rendered
    """
    if not parsed.dependencies:
        return parsed.resource

    names = list(parsed.dependencies)
    logger.debug("Requesting %d dependencies: %s", len(names), names)
    try:
        values = list(await maybe_await(loader.require(names)))
    except ViewDirectiveError:
        raise
    except Exception as exc:
        raise ResolutionError(
            f"Failed to load dependencies: {exc}",
            context={"dependencies": names},
        ) from exc

    if len(values) != len(names):
        raise ResolutionError(
            f"Loader returned {len(values)} values for {len(names)} dependencies",
            context={"dependencies": names},
        )
    fetched: Dict[str, Any] = dict(zip(names, values))

    document = parsed.resource
    for name, inclusion in (parsed.inclusions or {}).items():
        if name not in fetched:
            raise ResolutionError(
                f"Inclusion {name} is missing from the dependency list",
                context={"inclusion": name},
            )
        try:
            content = await render_inclusion(fetched[name], inclusion.data)
        except ViewDirectiveError:
            raise
        except Exception as exc:
            raise ResolutionError(
                f"Failed to render inclusion {name}: {exc}",
                context={"inclusion": name},
            ) from exc
        marker = placeholder_for(name)
        logger.debug("Substituting %d occurrence(s) of %s", document.count(marker), name)
        document = document.replace(marker, content)

    return document


__all__ = [
    "ResourceLoader",
    "complete_resolution",
    "maybe_await",
    "render_inclusion",
    "stringify",
]
