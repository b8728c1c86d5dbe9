"""Record reader: replays a parsed record tree onto a live board.

Only the main line is replayed. Side variations in the source document are
kept in the tree but never reach the board.
"""

from __future__ import annotations

import logging

from kifu.core.coords import sgf_to_coordinate, split_point_list
from kifu.core.enums import ReadPolicy, Stone
from kifu.core.errors import BoundsError, FormatError
from kifu.core.types import Coordinate, is_on_board, is_pass, pass_coordinate
from kifu.game.interfaces import IBoard
from kifu.record.models import LoadReport, RecordNode, RecordTree
from kifu.record.replayer import MoveReplayer

_LOGGER = logging.getLogger(__name__)


def _parse_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _parse_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


class RecordReader:
    """Drives a :class:`MoveReplayer` from a :class:`RecordTree`."""

    __slots__ = ("_board", "_size", "_policy", "_replayer", "_report", "_record_pass")

    def __init__(
        self,
        board: IBoard,
        *,
        policy: ReadPolicy = ReadPolicy.LENIENT,
    ) -> None:
        self._board = board
        self._size = board.board_size
        self._policy = policy
        self._replayer = MoveReplayer(board)
        self._report = LoadReport()
        self._record_pass: Coordinate | None = None

    @property
    def report(self) -> LoadReport:
        """Progress so far; still meaningful after :meth:`read` raised."""
        return self._report

    def read(self, tree: RecordTree) -> LoadReport:
        """Replay *tree* onto the board and return the load report.

        Under :attr:`ReadPolicy.STRICT` the first bad move raises and the
        board keeps every operation applied before it.
        """
        report = self._report
        report.record_size = _parse_int(tree.properties.get("SZ", ""))
        report.komi = _parse_float(tree.properties.get("KM", ""))
        if report.record_size is not None and report.record_size != self._size:
            _LOGGER.warning(
                "Record size %d differs from board size %d",
                report.record_size,
                self._size,
            )
            # The record's own pass token would otherwise decode to a point.
            self._record_pass = pass_coordinate(report.record_size)

        try:
            try:
                self._place_setup(tree.properties.get("AB", ""), tree.properties.get("AW", ""))
            finally:
                report.hidden_move_count = self._replayer.stone_count
                report.hidden_position_count = self._replayer.placed_count
                self._collect_placed()
            self._read_moves(tree.properties)
            for node in tree.main_line():
                self._read_node(node)
        finally:
            self._collect_placed()
        if report.skipped_moves:
            _LOGGER.warning("Skipped %d unreadable moves", report.skipped_moves)
        return report

    def _collect_placed(self) -> None:
        self._report.placed_moves += self._replayer.placed_count
        self._replayer.reset_placed_count()

    def _read_node(self, node: RecordNode) -> None:
        black_setup = node.get("AB")
        white_setup = node.get("AW")
        if black_setup or white_setup:
            self._place_setup(black_setup, white_setup)
        self._read_moves(node.properties)

    def _read_moves(self, props: dict[str, str]) -> None:
        for color in (Stone.BLACK, Stone.WHITE):
            if color.sgf_key in props:
                self._play(color, props[color.sgf_key])

    def _place_setup(self, black: str, white: str) -> None:
        black_tokens = split_point_list(black)
        white_tokens = split_point_list(white)
        for idx in range(max(len(black_tokens), len(white_tokens))):
            if idx < len(black_tokens):
                self._play(Stone.BLACK, black_tokens[idx])
            if idx < len(white_tokens):
                self._play(Stone.WHITE, white_tokens[idx])

    def _play(self, color: Stone, token: str) -> None:
        try:
            coord = self._decode(token)
        except (FormatError, BoundsError) as exc:
            if self._policy == ReadPolicy.STRICT:
                raise
            self._report.skipped_moves += 1
            _LOGGER.warning("Skipping %s move %r: %s", color, token, exc)
            return
        self._replayer.play_move(color, coord)

    def _decode(self, token: str) -> Coordinate:
        coord = sgf_to_coordinate(token, self._size)
        if coord == self._record_pass:
            return pass_coordinate(self._size)
        if not is_pass(coord, self._size) and not is_on_board(coord, self._size):
            raise BoundsError(f"Point {token!r} is outside a {self._size} board")
        return coord


def read_record(
    tree: RecordTree,
    board: IBoard,
    *,
    policy: ReadPolicy = ReadPolicy.LENIENT,
) -> LoadReport:
    """Convenience wrapper around :class:`RecordReader`."""
    return RecordReader(board, policy=policy).read(tree)
