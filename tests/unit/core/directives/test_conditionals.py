"""Tests for ConditionEvaluator and the default processIf hook."""
from __future__ import annotations

import pytest

from viewdirective.core.directives.base import ConditionRequest
from viewdirective.core.directives.conditionals import ConditionEvaluator, process_if
from viewdirective.core.exceptions import ConditionError
from viewdirective.core.settings import build_settings


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def evaluator() -> ConditionEvaluator:
    """Evaluator bound to settings with a few custom values."""
    settings = build_settings({
        "debug": True,
        "theme": "dark",
        "features": {"ads": False, "menu": {"enabled": True}},
        "count": 0,
    })
    return ConditionEvaluator(settings)


# =============================================================================
# Literals and references
# =============================================================================


class TestLiterals:
    @pytest.mark.parametrize("expr,expected", [
        ("true", True),
        ("false", False),
        ("TRUE", True),
        ("  False ", False),
    ])
    def test_literals(self, evaluator: ConditionEvaluator, expr: str, expected: bool) -> None:
        assert evaluator.evaluate(expr) is expected


class TestReferences:
    def test_truthy_setting(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("data.debug") is True

    def test_nested_setting(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("data.features.menu.enabled") is True
        assert evaluator.evaluate("data.features.ads") is False

    def test_missing_setting_is_false(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("data.nothing") is False

    def test_builtin_setting(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("data.cssLoader") is True


# =============================================================================
# Functions
# =============================================================================


class TestFunctions:
    def test_setting(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("setting(debug)") is True
        assert evaluator.evaluate("setting(count)") is False

    def test_setting_eq(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("setting-eq(theme, dark)") is True
        assert evaluator.evaluate("setting-eq(theme, light)") is False
        assert evaluator.evaluate("setting-eq(debug, true)") is True

    def test_env(self, evaluator: ConditionEvaluator, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VIEW_FLAG", "1")
        monkeypatch.delenv("VIEW_MISSING", raising=False)

        assert evaluator.evaluate("env(VIEW_FLAG)") is True
        assert evaluator.evaluate("env(VIEW_MISSING)") is False

    def test_not(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("not(false)") is True
        assert evaluator.evaluate("not(data.debug)") is False

    def test_and_or(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("and(true, data.debug, setting-eq(theme, dark))") is True
        assert evaluator.evaluate("and(true, false)") is False
        assert evaluator.evaluate("or(false, data.features.ads, true)") is True
        assert evaluator.evaluate("or(false, false)") is False

    def test_nested(self, evaluator: ConditionEvaluator) -> None:
        assert evaluator.evaluate("and(not(data.features.ads), or(false, setting(debug)))") is True


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    def test_empty_expression(self, evaluator: ConditionEvaluator) -> None:
        with pytest.raises(ConditionError, match="Empty"):
            evaluator.evaluate("   ")

    def test_malformed_expression(self, evaluator: ConditionEvaluator) -> None:
        with pytest.raises(ConditionError, match="Invalid condition"):
            evaluator.evaluate("data.debug == true")

    def test_unknown_function(self, evaluator: ConditionEvaluator) -> None:
        with pytest.raises(ConditionError, match="Unknown condition function"):
            evaluator.evaluate("exec(rm)")

    def test_wrong_arity(self, evaluator: ConditionEvaluator) -> None:
        with pytest.raises(ConditionError, match="Wrong number of arguments"):
            evaluator.evaluate("not(true, false)")

    def test_empty_and(self, evaluator: ConditionEvaluator) -> None:
        with pytest.raises(ConditionError):
            evaluator.evaluate("and()")

    def test_is_value_error(self, evaluator: ConditionEvaluator) -> None:
        with pytest.raises(ValueError):
            evaluator.evaluate("nope")


def test_process_if_uses_request_settings() -> None:
    settings = build_settings({"debug": False})
    request = ConditionRequest(
        condition="not(data.debug)",
        attributes={"rel": "include", "href": "a", "data-if": "not(data.debug)"},
        resource="a",
        tag_text='<link rel="include" href="a" data-if="not(data.debug)">',
        settings=settings,
    )

    assert process_if(request) is True
