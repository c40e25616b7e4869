"""Tests for tag attribute extraction."""
from __future__ import annotations

from viewdirective.core.attributes import extract_attributes


def test_double_and_single_quoted_values() -> None:
    attrs = extract_attributes('rel="stylesheet" href=\'a/b.css\'')
    assert attrs == {"rel": "stylesheet", "href": "a/b.css"}


def test_unquoted_and_valueless_attributes() -> None:
    attrs = extract_attributes("rel=include href=parts/head async")
    assert attrs == {"rel": "include", "href": "parts/head", "async": ""}


def test_names_are_lower_cased() -> None:
    attrs = extract_attributes('REL="CSS" Data-Title="Hi"')
    assert attrs == {"rel": "CSS", "data-title": "Hi"}


def test_first_duplicate_wins() -> None:
    assert extract_attributes('href="a" href="b"') == {"href": "a"}


def test_self_closing_slash_ignored() -> None:
    assert extract_attributes('rel="css" href="a.css" /') == {"rel": "css", "href": "a.css"}


def test_whitespace_around_equals() -> None:
    assert extract_attributes('rel = "css"\n  href =a.css') == {"rel": "css", "href": "a.css"}


def test_values_are_not_entity_decoded() -> None:
    assert extract_attributes('data-x="a &amp; b"') == {"data-x": "a &amp; b"}
