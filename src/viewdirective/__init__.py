"""
viewdirective - directive-tag resolution for HTML views

Scans view documents for ``<link>``-style dependency directives, collects the
dependencies they name, and splices resolved inclusions back into the view.
"""

__version__ = "0.4.0"

from viewdirective.core.engine import resolve, resolve_async

__all__ = ["__version__", "resolve", "resolve_async"]
