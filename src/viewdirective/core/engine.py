"""Entry points for view resolution.

Resolution runs in two phases:

- Phase 1 (parse): synchronous scan of the view text producing the rewritten
  document, its dependency list and its inclusion registry.
- Phase 2 (resolve): one batch request for all dependencies, then inclusion
  substitution.

Usage:
    document = await resolve_async("pages/index!cssLoader=link", loader)

    resolve("pages/index", loader, deliver=print)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional, Tuple

from viewdirective.core.directives.base import ParseResult
from viewdirective.core.exceptions import ResolutionError, ViewDirectiveError
from viewdirective.core.names import name_with_ext, split_resource_name
from viewdirective.core.resolution import ResourceLoader, complete_resolution, maybe_await
from viewdirective.core.settings import Settings, build_settings, parse_settings_string

logger = logging.getLogger(__name__)


def settings_for(
    resource_name: str,
    host_config: Optional[Mapping[str, Any]] = None,
) -> Tuple[str, Settings]:
    """Split a resource name and build the settings for resolving it.

    Returns:
        Tuple of (name without settings suffix, settings)
    """
    name, suffix = split_resource_name(resource_name)
    overrides = parse_settings_string(suffix) if suffix else None
    return name, build_settings(host_config, overrides)


def parse_view(text: str, settings: Settings) -> ParseResult:
    """Run the ``parse`` hook, accepting hooks that return a bare string."""
    parsed = settings.parse(text, settings)
    if isinstance(parsed, str):
        return ParseResult(resource=parsed)
    return parsed


async def resolve_async(
    resource_name: str,
    loader: ResourceLoader,
    host_config: Optional[Mapping[str, Any]] = None,
) -> str:
    """Resolve a view into its final document.

    Args:
        resource_name: View name, optionally followed by ``!name=value;...``
        loader: Host loading capability
        host_config: Caller-supplied settings layered over the defaults

    Returns:
        Final document

    Raises:
        ResolutionError: If the view or any of its dependencies cannot be loaded
        ConditionError: If an inclusion condition cannot be evaluated
    """
    name, settings = settings_for(resource_name, host_config)
    path = name_with_ext(name, settings.default_ext)
    logger.debug("Resolving view %s", path)

    try:
        text = await maybe_await(loader.load_text(path))
    except ViewDirectiveError:
        raise
    except Exception as exc:
        raise ResolutionError(
            f"Failed to load view {path}: {exc}",
            context={"resource": path},
        ) from exc

    parsed = parse_view(text, settings)
    return await complete_resolution(parsed, loader)


def resolve(
    resource_name: str,
    loader: ResourceLoader,
    deliver: Callable[[str], Any],
    host_config: Optional[Mapping[str, Any]] = None,
) -> None:
    """Resolve a view and hand the final document to ``deliver`` once.

    ``deliver`` is not called when resolution fails; the error propagates.

    Raises:
        ResolutionError: If called from a running event loop (use
            ``resolve_async`` there), or if resolution fails
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        document = asyncio.run(resolve_async(resource_name, loader, host_config))
    else:
        raise ResolutionError(
            "resolve() cannot be used inside a running event loop; await resolve_async()",
            context={"resource": resource_name},
        )
    deliver(document)


__all__ = ["parse_view", "resolve", "resolve_async", "settings_for"]
