"""Move replayer: feeds (color, point) operations to a board in turn order."""

from __future__ import annotations

from kifu.core.enums import Stone
from kifu.core.types import Coordinate, is_pass
from kifu.game.interfaces import IBoard


class MoveReplayer:
    """Applies moves while keeping colors strictly alternating.

    Records sometimes omit a pass or list two same-colored moves in a row.
    Instead of rejecting them, :meth:`play_move` inserts the single pass that
    restores alternation before the requested move.
    """

    __slots__ = ("_board", "_expected", "_placed", "_stones")

    def __init__(self, board: IBoard) -> None:
        self._board = board
        self._expected = Stone.BLACK
        self._placed = 0
        self._stones = 0

    @property
    def expected_color(self) -> Stone:
        return self._expected

    @property
    def placed_count(self) -> int:
        """Board operations applied since the last reset, inserted passes included."""
        return self._placed

    @property
    def stone_count(self) -> int:
        """Stones put on the board since the last reset."""
        return self._stones

    def reset_placed_count(self) -> None:
        self._placed = 0
        self._stones = 0

    def play_move(self, color: Stone, coord: Coordinate) -> None:
        """Play *color* at *coord*; the pass sentinel plays a pass."""
        if color != self._expected:
            self._board.pass_turn(self._expected)
            self._placed += 1
            self._expected = self._expected.opposite

        if is_pass(coord, self._board.board_size):
            self._board.pass_turn(color)
        else:
            self._board.place(color, coord)
            self._stones += 1
        self._placed += 1
        self._expected = color.opposite
