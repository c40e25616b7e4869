"""Tests for the directive classifier (filterTag / processTag)."""
from __future__ import annotations

import pytest

from viewdirective.core.attributes import extract_attributes
from viewdirective.core.directives.base import DirectiveResult, Inclusion
from viewdirective.core.directives.classifier import collect_data, filter_tag, process_tag
from viewdirective.core.exceptions import ConditionError
from viewdirective.core.settings import build_settings


def classify(tag_text: str, settings) -> DirectiveResult:
    """Classify a full tag the way the parse engine does."""
    inner = tag_text[tag_text.index(" ") + 1:-1]
    return process_tag(tag_text, extract_attributes(inner), settings)


class TestFilterTag:
    @pytest.mark.parametrize("rel", [
        "stylesheet", "css", "require", "x-require", "include", "x-include", "StyleSheet",
    ])
    def test_accepts_recognized_rel(self, settings, rel: str) -> None:
        assert filter_tag("", {"rel": rel, "href": "a"}, settings)

    @pytest.mark.parametrize("attrs", [
        {"rel": "icon", "href": "favicon.ico"},
        {"rel": "css"},
        {"rel": "css", "href": ""},
        {"href": "a.css"},
    ])
    def test_rejects(self, settings, attrs) -> None:
        assert not filter_tag("", attrs, settings)


class TestRejectedTags:
    def test_unrecognized_tag_yields_deletion(self, settings) -> None:
        result = classify('<link rel="icon" href="favicon.ico">', settings)

        assert result == DirectiveResult(dependency=None, inclusion=None, text="")

    def test_custom_filter_hook(self) -> None:
        settings = build_settings({"filterTag": lambda tag, attrs, s: False})

        result = classify('<link rel="stylesheet" href="a.css">', settings)

        assert result.dependency is None
        assert result.text == ""


class TestStyleDirectives:
    def test_default_css_loader(self, settings) -> None:
        result = classify('<link rel="stylesheet" href="a/b.css">', settings)

        assert result.dependency == "css!a/b.css"
        assert result.text == ""
        assert result.inclusion is None

    def test_explicit_prefix_not_doubled(self, settings) -> None:
        result = classify('<link rel="stylesheet" href="css!a/b.css">', settings)

        assert result.dependency == "css!a/b.css"

    def test_other_explicit_loader_kept(self, settings) -> None:
        result = classify('<x-link rel="css" href="link!a/b.css">', settings)

        assert result.dependency == "link!a/b.css"

    def test_configured_css_loader(self) -> None:
        settings = build_settings({"cssLoader": "link"})

        result = classify('<link rel="css" href="a/b.css">', settings)

        assert result.dependency == "link!a/b.css"

    def test_no_extension_defaulting(self, settings) -> None:
        result = classify('<link rel="css" href="theme">', settings)

        assert result.dependency == "css!theme"


class TestDependencyDirectives:
    def test_bare_identifier_passed_through(self, settings) -> None:
        result = classify('<link rel="require" href="app/model">', settings)

        assert result.dependency == "app/model"
        assert result.text == ""
        assert result.inclusion is None

    def test_type_attribute_is_loader(self, settings) -> None:
        result = classify('<x-link rel="x-require" type="css" href="path/style.css">', settings)

        assert result.dependency == "css!path/style.css"

    def test_explicit_prefix_beats_type(self, settings) -> None:
        result = classify('<link rel="require" type="text" href="css!style.css">', settings)

        assert result.dependency == "css!style.css"


class TestInclusionDirectives:
    def test_default_loader_extension_and_data(self, settings) -> None:
        result = classify('<link rel="x-include" href="parts/head" data-title="Hi">', settings)

        assert result.dependency == "view!parts/head.html"
        assert result.inclusion == Inclusion(name="view!parts/head.html", data={"title": "Hi"})
        assert result.text == '<link rel="x-include" href="view!parts/head.html">'

    def test_no_data_attributes(self, settings) -> None:
        result = classify('<link rel="include" href="parts/foot.tpl">', settings)

        assert result.inclusion == Inclusion(name="view!parts/foot.tpl", data=None)

    def test_type_attribute_and_configured_extension(self) -> None:
        settings = build_settings({"defaultInclusionExt": "inc"})

        result = classify('<link rel="include" type="text" href="parts/foot">', settings)

        assert result.dependency == "text!parts/foot.inc"

    def test_configured_inclusion_loader(self) -> None:
        settings = build_settings({"inclusionLoader": "text"})

        result = classify('<link rel="include" href="a">', settings)

        assert result.dependency == "text!a.html"

    def test_explicit_prefix_still_gets_extension(self, settings) -> None:
        result = classify('<link rel="include" type="text" href="view!parts/nav">', settings)

        assert result.dependency == "view!parts/nav.html"

    def test_condition_false_drops_inclusion(self, settings) -> None:
        result = classify('<link rel="x-include" href="parts/head" data-if="false">', settings)

        assert result == DirectiveResult.deletion()

    def test_condition_true_keeps_inclusion_and_data_if(self, settings) -> None:
        result = classify('<link rel="x-include" href="a" data-if="true" data-x="1">', settings)

        assert result.inclusion is not None
        assert result.inclusion.data == {"if": "true", "x": "1"}

    def test_condition_sees_settings(self) -> None:
        settings = build_settings({"debug": False})

        result = classify('<link rel="include" href="dbg" data-if="data.debug">', settings)

        assert result.inclusion is None

    def test_condition_error_propagates(self, settings) -> None:
        with pytest.raises(ConditionError):
            classify('<link rel="include" href="a" data-if="1 + 1">', settings)

    def test_custom_process_if_receives_request(self) -> None:
        requests = []

        def process_if(request):
            requests.append(request)
            return True

        settings = build_settings({"processIf": process_if})
        tag = '<link rel="include" href="parts/a" data-if="anything">'

        classify(tag, settings)

        assert len(requests) == 1
        request = requests[0]
        assert request.condition == "anything"
        assert request.resource == "parts/a"
        assert request.tag_text == tag
        assert request.attributes["href"] == "parts/a"
        assert request.settings is settings

    def test_process_if_not_called_without_condition(self) -> None:
        def process_if(request):
            raise AssertionError("processIf must not be called")

        settings = build_settings({"processIf": process_if})

        result = classify('<link rel="include" href="a">', settings)

        assert result.dependency == "view!a.html"


def test_collect_data() -> None:
    attrs = {"rel": "include", "data-a": "1", "data-b-c": "2", "href": "x"}

    assert collect_data(attrs) == {"a": "1", "b-c": "2"}
    assert collect_data({"rel": "include"}) is None


def test_classification_is_pure(settings) -> None:
    tag = '<link rel="include" href="a" data-x="1">'

    assert classify(tag, settings) == classify(tag, settings)
