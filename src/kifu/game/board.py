"""RecordingBoard: an :class:`IBoard` that records every move into history.

Captures and legality are the engine's business; this board only keeps the
move tree and which points hold a stone.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from kifu.core.enums import Stone
from kifu.core.errors import BoundsError
from kifu.core.types import Coordinate, is_on_board
from kifu.game.history import HistoryList, HistoryNode
from kifu.game.interfaces import IBoard

ChangeCallback = Callable[[HistoryNode], None]


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_changed: list[ChangeCallback] = field(default_factory=list)


class RecordingBoard(IBoard):
    """Applies placements and passes to a :class:`HistoryList`.

    While a :meth:`batch` is open, change notifications are held back and a
    single ``on_changed`` fires when the outermost batch exits.
    """

    __slots__ = (
        "_size",
        "_history",
        "_batch_depth",
        "_dirty",
        "_try_play_base",
        "_in_try_play_branch",
        "events",
    )

    def __init__(self, board_size: int, history: HistoryList | None = None) -> None:
        self._size = board_size
        self._history = history if history is not None else HistoryList()
        self._batch_depth = 0
        self._dirty = False
        self._try_play_base: int | None = None
        self._in_try_play_branch = False
        self.events = BoardEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board_size(self) -> int:
        return self._size

    @property
    def history(self) -> HistoryList:
        return self._history

    @property
    def is_trying(self) -> bool:
        return self._try_play_base is not None

    @property
    def next_color(self) -> Stone:
        last = self._history.current.last_color
        return Stone.BLACK if last is None else last.opposite

    def stones(self) -> dict[Coordinate, Stone]:
        """Occupied points of the current position."""
        occupied: dict[Coordinate, Stone] = {}
        for node in self._history.path_to_current():
            if node.last_color is not None and node.last_move is not None:
                occupied[node.last_move] = node.last_color
        return occupied

    def stones_of(self, stone: Stone) -> list[Coordinate]:
        return [coord for coord, color in self.stones().items() if color == stone]

    # ── IBoard impl ──────────────────────────────────────────────────────

    def place(self, stone: Stone, coord: Coordinate) -> None:
        if not is_on_board(coord, self._size):
            raise BoundsError(f"Point {coord} is outside a {self._size} board")
        self._record(stone, coord)

    def pass_turn(self, stone: Stone) -> None:
        self._record(stone, None)

    def clear(self) -> None:
        self._history.clear()
        self._try_play_base = None
        self._in_try_play_branch = False
        self._notify()

    @contextmanager
    def batch(self) -> Iterator[None]:
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._dirty = False
                self._emit_changed()

    # ── Try-play ─────────────────────────────────────────────────────────

    def begin_try_play(self) -> None:
        """Record subsequent moves as a side branch of the current node."""
        if self._try_play_base is None:
            self._try_play_base = self._history.current.handle
            self._in_try_play_branch = False

    def end_try_play(self) -> None:
        """Leave try-play mode and return to the branch base."""
        if self._try_play_base is None:
            return
        self._history.set_current(self._try_play_base)
        self._try_play_base = None
        self._in_try_play_branch = False
        self._notify()

    # ── Internals ────────────────────────────────────────────────────────

    def _record(self, stone: Stone, coord: Coordinate | None) -> None:
        if self._try_play_base is not None and not self._in_try_play_branch:
            self._history.add_try_play(self._try_play_base, stone, coord)
            self._in_try_play_branch = True
        else:
            self._history.append(stone, coord)
        self._notify()

    def _notify(self) -> None:
        if self._batch_depth > 0:
            self._dirty = True
            return
        self._emit_changed()

    def _emit_changed(self) -> None:
        current = self._history.current
        for cb in self.events.on_changed:
            cb(current)
