"""Filesystem host loader.

Provides a complete loading capability for view resolution outside of a module
system. Identifiers are dispatched on their ``loader!`` prefix:

- text!path: File text
- view!path: View resolved through the engine (recursively)
- css!path, link!path: Stylesheet recorded in ``stylesheets``; value is the path
- py!path: Python file imported; value is its ``render`` attribute if present,
  else the module itself (so a module-level ``execute`` works)

Identifiers without a prefix are looked up in the ``modules`` mapping. Values
are cached per identifier for the lifetime of the loader.
"""
from __future__ import annotations

import importlib.util
import logging
import re
from contextvars import ContextVar
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from viewdirective.core.exceptions import ResolutionError, ResourceNotFoundError, UnknownLoaderError
from viewdirective.core.names import split_loader_prefix
from viewdirective.core.resolution import maybe_await

logger = logging.getLogger(__name__)

# Plugin signature: (loader, path) -> value or awaitable
PluginType = Callable[["FileSystemLoader", str], Any]

# Views being resolved in the current context, outermost first (per asyncio task).
_VIEW_CHAIN: ContextVar[Tuple[str, ...]] = ContextVar("_VIEW_CHAIN", default=())


class FileSystemLoader:
    """Load views and their dependencies from a directory.

    Usage:
        loader = FileSystemLoader(Path("views"), modules={"nav": render_nav})
        document = await loader.load("view!index")
        print(loader.stylesheets)
    """

    def __init__(
        self,
        base_dir: Path,
        modules: Optional[Mapping[str, Any]] = None,
        host_config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize the loader.

        Args:
            base_dir: Directory identifiers are resolved against
            modules: Values for identifiers without a loader prefix
            host_config: Settings used when resolving nested views
        """
        self.base_dir = Path(base_dir)
        self.modules: Dict[str, Any] = dict(modules or {})
        self.host_config: Dict[str, Any] = dict(host_config or {})
        self.stylesheets: List[str] = []
        self._cache: Dict[str, Any] = {}
        self._plugins: Dict[str, PluginType] = {
            "text": _text_plugin,
            "view": _view_plugin,
            "css": _stylesheet_plugin,
            "link": _stylesheet_plugin,
            "py": _python_plugin,
        }

    def register_plugin(self, name: str, plugin: PluginType) -> None:
        """Register (or replace) the plugin for ``name!`` identifiers."""
        self._plugins[name] = plugin

    def resolve_path(self, name: str) -> Path:
        """Resolve a relative resource name against the base directory."""
        return self.base_dir / name

    def load_text(self, name: str) -> str:
        """Read a resource's text.

        Raises:
            ResourceNotFoundError: If the file does not exist
        """
        path = self.resolve_path(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ResourceNotFoundError(
                f"Resource not found: {name}",
                context={"resource": name, "path": str(path)},
            ) from exc

    async def require(self, names: Sequence[str]) -> List[Any]:
        """Load a batch of identifiers, returning values in the same order."""
        return [await self.load(name) for name in names]

    async def load(self, identifier: str) -> Any:
        """Load a single identifier (cached).

        Raises:
            UnknownLoaderError: If the prefix names no registered plugin
            ResourceNotFoundError: If a bare identifier is not in ``modules``
        """
        if identifier in self._cache:
            return self._cache[identifier]

        plugin_name, path = split_loader_prefix(identifier)
        if plugin_name is None:
            if identifier not in self.modules:
                raise ResourceNotFoundError(
                    f"Module not found: {identifier}",
                    context={"resource": identifier},
                )
            value = self.modules[identifier]
        else:
            plugin = self._plugins.get(plugin_name)
            if plugin is None:
                available = sorted(self._plugins.keys())
                raise UnknownLoaderError(
                    f"Unknown loader: {plugin_name}. Available loaders: {available}",
                    context={"resource": identifier, "loader": plugin_name},
                )
            logger.debug("Loading %s with %s plugin", path, plugin_name)
            value = await maybe_await(plugin(self, path))

        self._cache[identifier] = value
        return value


def _text_plugin(loader: FileSystemLoader, path: str) -> str:
    return loader.load_text(path)


def _stylesheet_plugin(loader: FileSystemLoader, path: str) -> str:
    if path not in loader.stylesheets:
        loader.stylesheets.append(path)
    return path


async def _view_plugin(loader: FileSystemLoader, name: str) -> str:
    # Local import: the engine is the loader's client.
    from viewdirective.core.engine import resolve_async

    chain = _VIEW_CHAIN.get()
    if name in chain:
        raise ResolutionError(
            f"Circular view inclusion detected: {name}",
            context={"resource": name, "chain": list(chain)},
        )
    token = _VIEW_CHAIN.set(chain + (name,))
    try:
        return await resolve_async(name, loader, loader.host_config)
    finally:
        _VIEW_CHAIN.reset(token)


def _python_plugin(loader: FileSystemLoader, path: str) -> Any:
    module = load_module_from_path(loader.resolve_path(path))
    return getattr(module, "render", module)


def load_module_from_path(path: Path) -> ModuleType:
    """Import a Python file as a standalone module.

    Raises:
        ResourceNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise ResourceNotFoundError(
            f"Python resource not found: {path}",
            context={"path": str(path)},
        )
    module_name = "viewdirective_view_" + re.sub(r"\W", "_", str(path.with_suffix("")))
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ResolutionError(f"Cannot import {path}", context={"path": str(path)})
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


__all__ = ["FileSystemLoader", "PluginType", "load_module_from_path"]
