from __future__ import annotations

from typing import Any, Dict, Mapping


class ViewDirectiveError(Exception):
    """Base exception for view directive resolution."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class SettingsError(ViewDirectiveError, ValueError):
    """Raised when a settings value cannot be coerced to its default's type."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ViewDirectiveError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConditionError(ViewDirectiveError, ValueError):
    """Raised when a ``data-if`` condition cannot be evaluated."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ViewDirectiveError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnterminatedTagError(ViewDirectiveError, ValueError):
    """Raised in strict mode when a directive tag has no closing ``>``."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ViewDirectiveError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ResolutionError(ViewDirectiveError, RuntimeError):
    """Raised when dependencies of a view cannot be fetched or rendered."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ViewDirectiveError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ResourceNotFoundError(ResolutionError, FileNotFoundError):
    """Raised when a loader cannot find the named resource."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ResolutionError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class UnknownLoaderError(ResolutionError, LookupError):
    """Raised when an identifier names a loader plugin that is not registered."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ResolutionError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


__all__ = [
    "ViewDirectiveError",
    "SettingsError",
    "ConditionError",
    "UnterminatedTagError",
    "ResolutionError",
    "ResourceNotFoundError",
    "UnknownLoaderError",
]
