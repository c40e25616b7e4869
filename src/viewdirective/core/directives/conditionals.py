"""Condition evaluation for inclusion directives.

The ``data-if`` attribute of an inclusion holds a function-based expression
evaluated against the active settings. Nothing is passed to ``eval``.

Supported expressions:
- true / false: Literal values (case-insensitive)
- data.name: Settings value is truthy (``data`` is the active settings)
- setting(name): Settings value is truthy
- setting-eq(name, value): Settings value equals value (compared as string)
- env(NAME): Environment variable set and non-empty
- not(expr): Negate condition
- and(expr, ...): All conditions true
- or(expr, ...): Any condition true

Example usage:
    <link rel="x-include" href="parts/debug" data-if="setting(debug)">
    <link rel="x-include" href="parts/ads" data-if="and(env(ADS), not(data.print))">
"""
from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Callable, Dict, List

from viewdirective.core.exceptions import ConditionError

from .base import ConditionRequest

if TYPE_CHECKING:
    from viewdirective.core.settings import Settings


class ConditionEvaluator:
    """Evaluate condition expressions against settings.

    Example expressions:
        setting(debug)
        setting-eq(cssLoader, link)
        and(env(CI), not(data.strict))
    """

    # Pattern to match function calls: func-name(args)
    # Supports hyphenated function names like setting-eq
    FUNCTION_PATTERN = re.compile(r"^(\w+(?:-\w+)*)\((.*)?\)$", re.DOTALL)

    # Pattern to match settings references: data.name[.name...]
    REFERENCE_PATTERN = re.compile(r"^data((?:\.\w+)+)$")

    LITERALS = {"true": True, "false": False}

    def __init__(self, settings: "Settings") -> None:
        """Initialize evaluator with the active settings.

        Args:
            settings: Settings the expression is evaluated against
        """
        self.settings = settings
        self.functions: Dict[str, Callable[..., bool]] = {
            "setting": self._setting_truthy,
            "setting-eq": self._setting_eq,
            "env": self._env,
            "not": self._not,
            "and": self._and,
            "or": self._or,
        }

    def evaluate(self, expr: str) -> bool:
        """Evaluate a condition expression.

        Args:
            expr: Condition expression like 'setting(debug)'

        Returns:
            Boolean result of the condition

        Raises:
            ConditionError: If expression is malformed or uses unknown function
        """
        expr = expr.strip()
        if not expr:
            raise ConditionError("Empty condition expression")

        literal = self.LITERALS.get(expr.lower())
        if literal is not None:
            return literal

        reference = self.REFERENCE_PATTERN.match(expr)
        if reference:
            return bool(self.settings.get_path(reference.group(1)[1:]))

        match = self.FUNCTION_PATTERN.match(expr)
        if not match:
            raise ConditionError(
                f"Invalid condition expression: {expr}",
                context={"condition": expr},
            )

        func_name = match.group(1)
        args_str = match.group(2) or ""

        if func_name not in self.functions:
            available = sorted(self.functions.keys())
            raise ConditionError(
                f"Unknown condition function: {func_name}. "
                f"Available functions: {available}",
                context={"condition": expr},
            )

        args = self._parse_args(args_str)
        try:
            return self.functions[func_name](*args)
        except TypeError as exc:
            raise ConditionError(
                f"Wrong number of arguments for {func_name}: {expr}",
                context={"condition": expr},
            ) from exc

    def _parse_args(self, args_str: str) -> List[str]:
        """Parse comma-separated arguments, handling nested function calls."""
        if not args_str.strip():
            return []

        args: List[str] = []
        current = ""
        depth = 0

        for char in args_str:
            if char == "(":
                depth += 1
                current += char
            elif char == ")":
                depth -= 1
                current += char
            elif char == "," and depth == 0:
                args.append(current.strip())
                current = ""
            else:
                current += char

        if current.strip():
            args.append(current.strip())

        return args

    def _setting_truthy(self, name: str) -> bool:
        return bool(self.settings.get_path(name))

    def _setting_eq(self, name: str, expected: str) -> bool:
        value = self.settings.get_path(name)
        if isinstance(value, bool):
            value = str(value).lower()
        return str(value) == expected

    def _env(self, name: str) -> bool:
        return bool(os.environ.get(name))

    def _not(self, expr: str) -> bool:
        return not self.evaluate(expr)

    def _and(self, *exprs: str) -> bool:
        if not exprs:
            raise TypeError("and() needs at least one argument")
        return all(self.evaluate(expr) for expr in exprs)

    def _or(self, *exprs: str) -> bool:
        if not exprs:
            raise TypeError("or() needs at least one argument")
        return any(self.evaluate(expr) for expr in exprs)


def process_if(request: ConditionRequest) -> bool:
    """Decide whether an inclusion directive survives its ``data-if`` condition.

    Errors are not caught: a condition that cannot be evaluated fails the
    whole resolution.
    """
    return ConditionEvaluator(request.settings).evaluate(request.condition)


__all__ = ["ConditionEvaluator", "process_if"]
