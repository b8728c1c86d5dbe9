"""Live board-history tree: main line plus try-play side branches.

All nodes live in one arena owned by :class:`HistoryList` and refer to each
other by integer handle, so walks over very long games never recurse.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from kifu.core.enums import Stone
from kifu.core.types import Coordinate

ROOT_HANDLE = 0


@dataclass(slots=True)
class NodeStats:
    """Engine statistics attached to a position."""

    calculation_count: int = 0
    black_winrate: float = 50.0

    @property
    def white_winrate(self) -> float:
        return 100.0 - self.black_winrate


@dataclass(slots=True, frozen=True)
class CandidateLine:
    """A ranked engine continuation.

    ``moves`` holds coordinates in play order, ``None`` marks a pass.
    ``winrate`` is the percentage for the side to move.
    """

    moves: tuple[Coordinate | None, ...]
    playouts: int
    winrate: float


@dataclass(slots=True)
class HistoryNode:
    """A single position in the live game tree."""

    handle: int
    move_number: int = 0
    last_color: Stone | None = None
    last_move: Coordinate | None = None  # None means pass (or no move at root)
    stats: NodeStats = field(default_factory=NodeStats)
    candidates: list[CandidateLine] = field(default_factory=list)
    previous: int | None = None
    next: int | None = None
    try_plays: list[int] = field(default_factory=list)

    @property
    def is_pass(self) -> bool:
        return self.last_color is not None and self.last_move is None


class HistoryList:
    """Owns every :class:`HistoryNode` and a movable ``current`` pointer.

    The root's ``next`` chain is the canonical game. Try-play branches hang
    off arbitrary nodes; a branch head's ``previous`` is its base node.
    """

    __slots__ = ("_nodes", "_current")

    def __init__(self) -> None:
        self._nodes: list[HistoryNode] = [HistoryNode(handle=ROOT_HANDLE)]
        self._current = ROOT_HANDLE

    # ── Access ───────────────────────────────────────────────────────────

    @property
    def root(self) -> HistoryNode:
        return self._nodes[ROOT_HANDLE]

    @property
    def current(self) -> HistoryNode:
        return self._nodes[self._current]

    def node(self, handle: int) -> HistoryNode:
        return self._nodes[handle]

    def __len__(self) -> int:
        return len(self._nodes)

    def main_line(self) -> Iterator[HistoryNode]:
        """Yield main-line nodes after the root, in play order."""
        return self.chain(self.root.next)

    def chain(self, handle: int | None) -> Iterator[HistoryNode]:
        """Yield *handle* and its ``next`` successors."""
        while handle is not None:
            node = self._nodes[handle]
            yield node
            handle = node.next

    def path_to_current(self) -> list[HistoryNode]:
        """Nodes from the root to ``current`` inclusive."""
        path: list[HistoryNode] = []
        handle: int | None = self._current
        while handle is not None:
            node = self._nodes[handle]
            path.append(node)
            handle = node.previous
        path.reverse()
        return path

    # ── Mutation ─────────────────────────────────────────────────────────

    def _new_node(
        self,
        base: HistoryNode,
        color: Stone,
        coord: Coordinate | None,
    ) -> HistoryNode:
        node = HistoryNode(
            handle=len(self._nodes),
            move_number=base.move_number + 1,
            last_color=color,
            last_move=coord,
            previous=base.handle,
        )
        self._nodes.append(node)
        return node

    def append(self, color: Stone, coord: Coordinate | None) -> HistoryNode:
        """Add a move after ``current``, replacing any forward continuation."""
        base = self.current
        node = self._new_node(base, color, coord)
        base.next = node.handle
        self._current = node.handle
        return node

    def add_try_play(
        self,
        base_handle: int,
        color: Stone,
        coord: Coordinate | None,
    ) -> HistoryNode:
        """Start a new try-play branch rooted at *base_handle*."""
        base = self._nodes[base_handle]
        head = self._new_node(base, color, coord)
        base.try_plays.append(head.handle)
        self._current = head.handle
        return head

    def swap_try_play(self, base_handle: int, index: int) -> None:
        """Exchange the main continuation of a node with one of its try-plays."""
        base = self._nodes[base_handle]
        head = base.try_plays[index]
        if base.next is None:
            base.next = head
            del base.try_plays[index]
        else:
            base.try_plays[index], base.next = base.next, head

    def set_current(self, handle: int) -> HistoryNode:
        self._current = self._nodes[handle].handle
        return self.current

    def previous(self) -> HistoryNode | None:
        """Step ``current`` one move back; ``None`` at the root."""
        prev = self.current.previous
        if prev is None:
            return None
        self._current = prev
        return self.current

    def forward(self) -> HistoryNode | None:
        """Step ``current`` along its main continuation."""
        nxt = self.current.next
        if nxt is None:
            return None
        self._current = nxt
        return self.current

    def clear(self) -> None:
        """Drop every node except a fresh root."""
        self._nodes = [HistoryNode(handle=ROOT_HANDLE)]
        self._current = ROOT_HANDLE
