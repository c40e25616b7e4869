"""Tests for the directive tag scanner."""
from __future__ import annotations

from viewdirective.core.directives.base import FoundTag
from viewdirective.core.directives.scanner import find_next_tag
from viewdirective.core.settings import build_settings


def test_finds_default_tag(settings) -> None:
    found = find_next_tag('<p>x</p><link rel="css" href="a.css">', 0, settings)

    assert found == FoundTag(name="link", position=8, tag_start="<link ")


def test_leftmost_configured_tag_wins(settings) -> None:
    text = '<x-link rel="css" href="a.css"><link rel="css" href="b.css">'

    found = find_next_tag(text, 0, settings)

    assert found is not None
    assert found.name == "x-link"
    assert found.position == 0


def test_search_starts_at_cursor(settings) -> None:
    text = '<link rel="css" href="a.css"><link rel="css" href="b.css">'

    found = find_next_tag(text, 1, settings)

    assert found is not None
    assert found.position == text.index("<link", 1)


def test_tag_without_attributes_never_matches(settings) -> None:
    assert find_next_tag("<link><link>\n<link/>", 0, settings) is None


def test_no_more_tags(settings) -> None:
    assert find_next_tag("<div>plain</div>", 0, settings) is None


def test_single_tag_name_string() -> None:
    settings = build_settings({"directiveTag": "x-use"})

    found = find_next_tag('<link rel="css" href="a"><x-use rel="css" href="b">', 0, settings)

    assert found is not None
    assert found.name == "x-use"
    assert found.tag_start == "<x-use "


def test_tie_prefers_first_configured_name() -> None:
    settings = build_settings({"directiveTag": ["link", "link"]})

    found = find_next_tag('<link rel="css" href="a">', 0, settings)

    assert found is not None
    assert found.position == 0
