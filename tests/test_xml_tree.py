"""Tests for the feed XML to tree conversion."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from feedsheet.xml_tree import ATTR_KEY, CHAR_KEY, parse_document, parse_feed


def test_text_only_node_is_string() -> None:
    assert parse_document("<a><b>hello</b></a>") == {"a": {"b": "hello"}}


def test_attributes_and_text() -> None:
    tree = parse_document("<a><title type='text'>People</title></a>")
    assert tree["a"]["title"] == {ATTR_KEY: {"type": "text"}, CHAR_KEY: "People"}


def test_attributes_without_text() -> None:
    tree = parse_document("<a><link rel='self' href='x'/></a>")
    assert tree["a"]["link"] == {ATTR_KEY: {"rel": "self", "href": "x"}}


def test_empty_node_is_empty_dict() -> None:
    assert parse_document("<a><b/></a>") == {"a": {"b": {}}}


def test_repeated_children_collapse_to_list() -> None:
    tree = parse_document("<a><b>1</b><b>2</b><b>3</b></a>")
    assert tree["a"]["b"] == ["1", "2", "3"]


def test_single_child_stays_bare() -> None:
    tree = parse_document("<a><entry><x>1</x></entry></a>")
    assert tree["a"]["entry"] == {"x": "1"}


def test_whitespace_between_children_is_ignored() -> None:
    tree = parse_document("<a>\n  <b>1</b>\n</a>")
    assert tree == {"a": {"b": "1"}}


def test_document_prefixes_are_kept() -> None:
    body = (
        "<feed xmlns='http://www.w3.org/2005/Atom' "
        "xmlns:gsx='http://schemas.google.com/spreadsheets/2006/extended' "
        "xmlns:gs='http://schemas.google.com/spreadsheets/2006'>"
        "<entry><gsx:name>Alice</gsx:name>"
        "<gs:cell row='1' col='2'>x</gs:cell></entry></feed>"
    )
    entry = parse_feed(body)["entry"]
    assert entry["gsx:name"] == "Alice"
    assert entry["gs:cell"] == {ATTR_KEY: {"row": "1", "col": "2"}, CHAR_KEY: "x"}


def test_golden_list_feed(golden_dir: Path) -> None:
    feed = parse_feed((golden_dir / "sheet123" / "od6" / "list.xml").read_text())
    assert len(feed["entry"]) == 2
    bob = feed["entry"][1]
    assert bob["gsx:name"] == "Bob"
    assert bob["gsx:city"] == {}
    assert bob["title"] == {ATTR_KEY: {"type": "text"}, CHAR_KEY: "Bob"}


def test_feed_without_entries(golden_dir: Path) -> None:
    feed = parse_feed((golden_dir / "sheet123" / "od7" / "list.xml").read_text())
    assert "entry" not in feed
    assert feed["openSearch:totalResults"] == "0"


def test_malformed_xml_raises_parse_error() -> None:
    with pytest.raises(ET.ParseError):
        parse_feed("<feed><entry></feed>")


def test_whitespace_only_leaf_is_empty_dict() -> None:
    """A pretty-printed empty element is the same as a self-closing one."""
    assert parse_document("<a><b>\n    </b></a>") == {"a": {"b": {}}}


def test_whitespace_only_text_with_attributes_is_omitted() -> None:
    tree = parse_document("<a><b row='1'>  </b></a>")
    assert tree["a"]["b"] == {ATTR_KEY: {"row": "1"}}


def test_text_around_children_is_joined() -> None:
    tree = parse_document("<a>one<b>x</b>two</a>")
    assert tree["a"] == {CHAR_KEY: "onetwo", "b": "x"}


def test_pretty_printed_empty_custom_column() -> None:
    body = (
        "<feed xmlns='http://www.w3.org/2005/Atom' "
        "xmlns:gsx='http://schemas.google.com/spreadsheets/2006/extended'>"
        "<entry><id>x/a</id><gsx:city>\n    </gsx:city></entry></feed>"
    )
    assert parse_feed(body)["entry"]["gsx:city"] == {}
