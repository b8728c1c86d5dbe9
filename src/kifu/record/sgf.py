"""Record-format (SGF) text parsing and serialization.

Parsing the document grammar is delegated to :mod:`sgfmill`; the parsed game
is converted into a :class:`RecordTree` holding raw single-valued properties.
Serialization is done here so the nesting of the output is fully controlled.
"""

from __future__ import annotations

import logging
import re

from sgfmill import sgf

from kifu.core.errors import FormatError
from kifu.record.models import RecordTree

_LOGGER = logging.getLogger(__name__)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_TEXT_PROPERTIES = {"C", "GC", "N"}


def _decode(raw: bytes | str, encoding: str) -> str:
    if isinstance(raw, str):
        return raw
    return raw.decode(encoding, errors="replace")


def _unescape_text(value: str) -> str:
    # An escaped newline is a soft line break and disappears entirely.
    value = value.replace("\\\r\n", "").replace("\\\n", "")
    return _ESCAPE_RE.sub(r"\1", value)


def _escape_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("]", "\\]")


def _node_properties(node: sgf.Tree_node, encoding: str) -> dict[str, str]:
    """Flatten one parsed node; multi-valued properties are comma-joined."""
    props: dict[str, str] = {}
    for key in node.properties():
        values = [_decode(raw, encoding) for raw in node.get_raw_list(key)]
        if key in _TEXT_PROPERTIES:
            values = [_unescape_text(value) for value in values]
        props[key] = ",".join(values)
    return props


def _tree_from_game(game: sgf.Sgf_game) -> RecordTree:
    encoding = game.get_charset()
    root = game.get_root()
    tree = RecordTree(_node_properties(root, encoding))

    if len(root) == 0:
        return tree
    if len(root) > 1:
        _LOGGER.debug("Ignoring %d top-level variations", len(root) - 1)

    stack: list[tuple[sgf.Tree_node, int | None]] = [(root[0], None)]
    while stack:
        parsed, parent = stack.pop()
        node = tree.new_node(parent, _node_properties(parsed, encoding))
        for idx in range(len(parsed) - 1, -1, -1):
            stack.append((parsed[idx], node.handle))
    _number_main_line(tree)
    return tree


def _number_main_line(tree: RecordTree) -> None:
    number = 0
    for node in tree.main_line():
        if "B" in node.properties or "W" in node.properties:
            number += 1
            node.move_number = number


def parse_record(text: str) -> RecordTree:
    """Parse record text into a :class:`RecordTree`.

    Raises :class:`FormatError` when the document structure is invalid.
    """
    try:
        game = sgf.Sgf_game.from_string(text)
    except ValueError as exc:
        raise FormatError(f"Invalid record: {exc}") from exc
    return _tree_from_game(game)


def parse_record_bytes(data: bytes) -> RecordTree:
    """Parse an encoded record document, honouring its ``CA`` charset."""
    try:
        game = sgf.Sgf_game.from_bytes(data)
    except ValueError as exc:
        raise FormatError(f"Invalid record: {exc}") from exc
    return _tree_from_game(game)


def _format_properties(props: dict[str, str]) -> str:
    return "".join(f"{key}[{_escape_value(value)}]" for key, value in props.items())


def serialize_record(tree: RecordTree) -> str:
    """Serialize *tree* as nested record text.

    Pre-order, main child first; every subtree below the first game node is
    wrapped in its own parentheses.
    """
    parts: list[str] = ["("]
    if tree.properties:
        parts.append(";")
        parts.append(_format_properties(tree.properties))

    if tree.root is not None:
        # None entries close a parenthesised subtree.
        stack: list[tuple[int, int] | None] = [(tree.root, 0)]
        while stack:
            item = stack.pop()
            if item is None:
                parts.append(")")
                continue
            handle, depth = item
            node = tree.node(handle)
            if depth > 0:
                parts.append("(")
                stack.append(None)
            parts.append(";")
            parts.append(_format_properties(node.properties))
            for child in reversed(node.children):
                stack.append((child, depth + 1))

    parts.append(")")
    return "".join(parts)
