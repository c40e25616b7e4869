"""Directive processing for view documents.

This package provides the phase-1 components of view resolution:

- base: Result types and hook protocols
- scanner: Locate the next candidate directive tag
- classifier: Decide directive kind, identifier and replacement text
- conditionals: Evaluate ``data-if`` conditions of inclusions
- parser: Drive the above in one pass over a document
"""
from __future__ import annotations

from .base import (
    ConditionRequest,
    DirectiveResult,
    FoundTag,
    Inclusion,
    ParseResult,
)
from .classifier import filter_tag, process_tag
from .conditionals import ConditionEvaluator, process_if
from .parser import parse
from .scanner import find_next_tag

__all__ = [
    # Types
    "ConditionRequest",
    "DirectiveResult",
    "FoundTag",
    "Inclusion",
    "ParseResult",
    # Default hooks
    "find_next_tag",
    "filter_tag",
    "process_tag",
    "process_if",
    "parse",
    # Conditionals
    "ConditionEvaluator",
]
