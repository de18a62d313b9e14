"""Feed XML to nested key/value tree.

Converts an Atom feed document into plain dicts, lists and strings, in the
shape the model builders consume:

- Tag and attribute names keep the prefix used in the document
  (``gsx:name``, ``gs:cell``); the default namespace has no prefix.
- Attributes are collected under ``ATTR_KEY``.
- Character content goes under ``CHAR_KEY`` when the node also has
  attributes or children. A text-only node is just its string. Text runs
  around child elements are joined into one string.
- Whitespace-only text counts as no text, so an empty or pretty-printed
  empty node without attributes is ``{}``.
- Repeated children collapse into a list; a single child stays a bare node.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from typing import Any

CHAR_KEY = "_"
ATTR_KEY = "$"


def parse_feed(body: str) -> dict[str, Any]:
    """Parse a feed document and return its root ``<feed>`` node.

    Raises:
        xml.etree.ElementTree.ParseError: If the body is not well-formed XML
    """
    return parse_document(body).get("feed", {})


def parse_document(body: str) -> dict[str, Any]:
    """Parse an XML document into ``{root_name: root_node}``."""
    prefixes: dict[str, str] = {}
    root: ET.Element | None = None

    for event, item in ET.iterparse(
        io.BytesIO(body.encode("utf-8")), events=("start-ns", "end")
    ):
        if event == "start-ns":
            prefix, uri = item
            # First declaration wins; feeds declare each namespace once
            prefixes.setdefault(uri, prefix)
        else:
            root = item

    if root is None:
        return {}
    return {_qualified_name(root.tag, prefixes): _convert(root, prefixes)}


def _qualified_name(tag: str, prefixes: dict[str, str]) -> str:
    """Turn ``{uri}local`` into ``prefix:local`` using the document's prefixes."""
    if not tag.startswith("{"):
        return tag
    uri, _, local = tag[1:].partition("}")
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _convert(elem: ET.Element, prefixes: dict[str, str]) -> Any:
    attrs = {_qualified_name(k, prefixes): v for k, v in elem.attrib.items()}
    children = list(elem)
    # Text runs between children are joined; whitespace-only text is no text
    text = (elem.text or "") + "".join(child.tail or "" for child in children)
    if not text.strip():
        text = ""

    if not children and not attrs:
        return text if text else {}

    node: dict[str, Any] = {}
    if attrs:
        node[ATTR_KEY] = attrs
    if text:
        node[CHAR_KEY] = text

    for child in children:
        name = _qualified_name(child.tag, prefixes)
        value = _convert(child, prefixes)
        if name not in node:
            node[name] = value
        elif isinstance(node[name], list):
            node[name].append(value)
        else:
            node[name] = [node[name], value]

    return node
