"""Tests for entry key classification and field normalization."""

from __future__ import annotations

import pytest

from feedsheet.normalize import (
    DROP,
    KeyKind,
    classify_key,
    force_list,
    normalize_field,
    text_of,
)


class TestClassifyKey:
    @pytest.mark.parametrize(
        ("key", "kind"),
        [
            ("id", KeyKind.IDENTIFIER),
            ("gsx:name", KeyKind.CUSTOM_COLON),
            ("gsx:", KeyKind.CUSTOM_COLON),
            ("gsx$name", KeyKind.CUSTOM_DOLLAR),
            ("gsx$", KeyKind.CUSTOM_DOLLAR),
            ("title", KeyKind.OTHER),
            ("gs:cell", KeyKind.OTHER),
            ("gsxname", KeyKind.OTHER),
        ],
    )
    def test_kinds(self, key: str, kind: KeyKind) -> None:
        assert classify_key(key) is kind


class TestCustomColumns:
    def test_colon_prefix_is_stripped(self) -> None:
        assert normalize_field("gsx:name", "Alice") == ("name", "Alice")

    def test_dollar_prefix_is_stripped_and_unwrapped(self) -> None:
        assert normalize_field("gsx$name", {"$t": "Alice"}) == ("name", "Alice")

    def test_both_prefixes_give_same_result(self) -> None:
        """The two spellings of a custom column normalize identically."""
        assert normalize_field("gsx:age", "30") == normalize_field("gsx$age", {"$t": "30"})

    def test_empty_node_becomes_none(self) -> None:
        assert normalize_field("gsx:city", {}) == ("city", None)

    def test_empty_node_becomes_none_for_dollar_prefix(self) -> None:
        assert normalize_field("gsx$city", {}) == ("city", None)

    def test_bare_colon_prefix_uses_fallback_name(self) -> None:
        assert normalize_field("gsx:", "x") == ("gsx", "x")

    def test_bare_dollar_prefix_uses_fallback_name(self) -> None:
        assert normalize_field("gsx$", {"$t": "x"}) == ("gsx", "x")

    def test_dollar_node_without_text_is_kept(self) -> None:
        node = {"type": "text"}
        assert normalize_field("gsx$note", node) == ("note", node)

    def test_colon_node_with_attributes_is_kept(self) -> None:
        node = {"$": {"type": "text"}, "_": "hi"}
        assert normalize_field("gsx:note", node) == ("note", node)


class TestUnprefixedKeys:
    def test_identifier_is_verbatim(self) -> None:
        url = "https://spreadsheets.google.com/feeds/list/k/od6/public/values/cokwr"
        assert normalize_field("id", url) == ("id", url)

    def test_identifier_node_is_not_unwrapped(self) -> None:
        node = {"$t": "https://example.com/cokwr"}
        assert normalize_field("id", node) == ("id", node)

    def test_text_content_is_extracted(self) -> None:
        assert normalize_field("title", {"type": "text", "$t": "Alice"}) == ("title", "Alice")

    def test_plain_string_is_dropped(self) -> None:
        assert normalize_field("updated", "2013-05-14T09:12:33.117Z")[1] is DROP

    def test_empty_node_is_dropped(self) -> None:
        """Unlike custom columns, empty unprefixed fields are dropped, not nulled."""
        assert normalize_field("content", {})[1] is DROP

    def test_list_is_dropped(self) -> None:
        assert normalize_field("link", [{"rel": "self"}])[1] is DROP


class TestForceList:
    def test_single_node_is_wrapped(self) -> None:
        assert force_list({"a": 1}) == [{"a": 1}]

    def test_list_passes_through(self) -> None:
        entries = [{"a": 1}, {"a": 2}]
        assert force_list(entries) is entries


class TestTextOf:
    def test_string(self) -> None:
        assert text_of("People") == "People"

    def test_xml_node_with_attributes(self) -> None:
        assert text_of({"$": {"type": "text"}, "_": "People"}) == "People"

    def test_json_node(self) -> None:
        assert text_of({"type": "text", "$t": "People"}) == "People"

    def test_empty_node(self) -> None:
        assert text_of({}) == ""

    def test_missing(self) -> None:
        assert text_of(None) is None
