"""Normalization of feed entry keys and values.

The same custom column can reach us in two spellings depending on how the
feed was decoded: ``gsx:name`` from the XML tree and ``gsx$name`` from the
JSON feed dialect, where scalars are additionally wrapped as ``{"$t": ...}``.
Every raw key is classified first, then normalized per kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from feedsheet.xml_tree import CHAR_KEY

CUSTOM_COLON_PREFIX = "gsx:"
CUSTOM_DOLLAR_PREFIX = "gsx$"
TEXT_KEY = "$t"
ID_KEY = "id"

# Sentinel for fields that are not copied to the output record
DROP = object()


class KeyKind(Enum):
    IDENTIFIER = "identifier"
    CUSTOM_COLON = "custom-colon"
    CUSTOM_DOLLAR = "custom-dollar"
    OTHER = "other"


def classify_key(key: str) -> KeyKind:
    """Classify a raw entry key."""
    if key.startswith(CUSTOM_COLON_PREFIX):
        return KeyKind.CUSTOM_COLON
    if key.startswith(CUSTOM_DOLLAR_PREFIX):
        return KeyKind.CUSTOM_DOLLAR
    if key == ID_KEY:
        return KeyKind.IDENTIFIER
    return KeyKind.OTHER


def normalize_field(key: str, value: Any) -> tuple[str, Any]:
    """Normalize one entry field.

    Returns:
        ``(name, value)``. ``value`` is ``DROP`` when the field must not be
        copied to the record.
    """
    kind = classify_key(key)

    if kind is KeyKind.IDENTIFIER:
        return key, value

    if kind is KeyKind.OTHER:
        if isinstance(value, dict) and TEXT_KEY in value:
            return key, value[TEXT_KEY]
        return key, DROP

    prefix = CUSTOM_COLON_PREFIX if kind is KeyKind.CUSTOM_COLON else CUSTOM_DOLLAR_PREFIX
    # A bare prefix has no column name; it is stored under "gsx"
    name = key[len(prefix) :] or prefix[:3]

    if _is_empty_node(value):
        return name, None
    if kind is KeyKind.CUSTOM_DOLLAR and isinstance(value, dict) and TEXT_KEY in value:
        return name, value[TEXT_KEY]
    return name, value


def force_list(value: Any) -> list[Any]:
    """Wrap a single node in a list; lists pass through unchanged."""
    if isinstance(value, list):
        return value
    return [value]


def text_of(node: Any) -> Any:
    """Return the character content of a node in either feed dialect.

    Text-only XML nodes are already strings. Nodes with attributes carry
    their text under ``CHAR_KEY``; JSON dialect nodes under ``$t``.
    """
    if isinstance(node, dict):
        if CHAR_KEY in node:
            return node[CHAR_KEY]
        if TEXT_KEY in node:
            return node[TEXT_KEY]
        return "" if not node else None
    return node


def _is_empty_node(value: Any) -> bool:
    return isinstance(value, dict) and not value
