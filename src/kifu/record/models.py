"""Record-format tree models.

A :class:`RecordTree` is an arena of :class:`RecordNode` objects addressed by
integer handle. The first child of a node is its main continuation; further
children are variations.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class RecordNode:
    """A single ``;``-node of a record document."""

    handle: int
    properties: dict[str, str] = field(default_factory=dict)
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    move_number: int = 0

    @property
    def main_child(self) -> int | None:
        return self.children[0] if self.children else None

    def get(self, key: str, default: str = "") -> str:
        return self.properties.get(key, default)


@dataclass(slots=True)
class LoadReport:
    """Outcome of replaying a record onto a board."""

    hidden_move_count: int = 0
    hidden_position_count: int = 0
    placed_moves: int = 0
    skipped_moves: int = 0
    record_size: int | None = None
    komi: float | None = None


class RecordTree:
    """Owns the nodes of one record document.

    ``properties`` are the document-root properties (``FF``, ``SZ`` ...);
    ``root`` is the handle of the first game node, or ``None`` for a document
    without one.
    """

    __slots__ = ("properties", "root", "_nodes")

    def __init__(self, properties: dict[str, str] | None = None) -> None:
        self.properties: dict[str, str] = dict(properties or {})
        self.root: int | None = None
        self._nodes: list[RecordNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, handle: int) -> RecordNode:
        return self._nodes[handle]

    def new_node(
        self,
        parent: int | None = None,
        properties: dict[str, str] | None = None,
    ) -> RecordNode:
        """Create a node; attach it as the last child of *parent* if given.

        A parentless node becomes ``root`` when the tree has none yet.
        """
        node = RecordNode(
            handle=len(self._nodes),
            properties=dict(properties or {}),
            parent=parent,
        )
        self._nodes.append(node)
        if parent is None:
            if self.root is None:
                self.root = node.handle
        else:
            self._nodes[parent].children.append(node.handle)
        return node

    def main_line(self) -> Iterator[RecordNode]:
        """Yield the first game node and its main-child successors."""
        handle = self.root
        while handle is not None:
            node = self._nodes[handle]
            yield node
            handle = node.main_child
