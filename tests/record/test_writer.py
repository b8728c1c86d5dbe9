"""Tests for snapshotting live history into record text."""

from __future__ import annotations

from kifu.core.enums import Stone
from kifu.game.board import RecordingBoard
from kifu.game.history import NodeStats
from kifu.game.settings import RecordSettings
from kifu.record.reader import read_record
from kifu.record.sgf import parse_record, serialize_record
from kifu.record.writer import RecordWriter, snapshot_text

HEADER = "(;FF[4]KM[7.5]GM[1]SZ[19]CA[UTF-8]AP[kifu]"


def _board_with(*moves: tuple[Stone, tuple[int, int] | None]) -> RecordingBoard:
    board = RecordingBoard(19)
    for color, coord in moves:
        if coord is None:
            board.pass_turn(color)
        else:
            board.place(color, coord)
    return board


def _main_line_board() -> RecordingBoard:
    return _board_with(
        (Stone.BLACK, (15, 3)),
        (Stone.WHITE, (3, 3)),
        (Stone.BLACK, (15, 15)),
        (Stone.WHITE, (3, 15)),
    )


class TestRecordWriter:
    def test_root_properties(self) -> None:
        tree = RecordWriter(RecordingBoard(19).history, RecordSettings()).snapshot()
        assert list(tree.properties.items()) == [
            ("FF", "4"),
            ("KM", "7.5"),
            ("GM", "1"),
            ("SZ", "19"),
            ("CA", "UTF-8"),
            ("AP", "kifu"),
        ]
        assert tree.root is None

    def test_two_moves(self) -> None:
        board = _board_with((Stone.BLACK, (15, 3)), (Stone.WHITE, (3, 3)))
        assert snapshot_text(board.history, RecordSettings()) == (
            HEADER + ";B[pd](;W[dd]))"
        )

    def test_settings_change_header(self) -> None:
        settings = RecordSettings(board_size=9, komi=6.0, app_name="tester")
        board = RecordingBoard(9)
        board.place(Stone.BLACK, (2, 2))
        assert snapshot_text(board.history, settings) == (
            "(;FF[4]KM[6]GM[1]SZ[9]CA[UTF-8]AP[tester];B[cc])"
        )

    def test_pass_uses_sentinel_token(self) -> None:
        board = _board_with((Stone.BLACK, (15, 3)), (Stone.WHITE, None))
        text = snapshot_text(board.history, RecordSettings())
        assert text.endswith(";B[pd](;W[tt]))")

    def test_off_board_move_is_written_as_pass(self) -> None:
        board = RecordingBoard(19)
        board.history.append(Stone.BLACK, (25, 3))
        text = snapshot_text(board.history, RecordSettings())
        assert text.endswith(";B[tt])")

    def test_move_numbers_follow_history(self) -> None:
        tree = RecordWriter(_main_line_board().history, RecordSettings()).snapshot()
        assert [node.move_number for node in tree.main_line()] == [1, 2, 3, 4]

    def test_comment_needs_more_than_100_calculations(self) -> None:
        board = _board_with((Stone.BLACK, (15, 3)), (Stone.WHITE, (3, 3)))
        first, second = board.history.main_line()
        first.stats = NodeStats(calculation_count=101, black_winrate=55.0)
        second.stats = NodeStats(calculation_count=100, black_winrate=40.0)

        nodes = list(RecordWriter(board.history, RecordSettings()).snapshot().main_line())
        assert nodes[0].properties["C"] == "Black: 55.0; White: 45.0"
        assert "C" not in nodes[1].properties

    def test_try_play_branch_is_sibling_of_main_continuation(self) -> None:
        board = _main_line_board()
        third = list(board.history.main_line())[2]
        board.history.set_current(third.handle)
        board.begin_try_play()
        board.place(Stone.WHITE, (16, 16))
        board.place(Stone.BLACK, (2, 2))
        board.end_try_play()

        tree = RecordWriter(board.history, RecordSettings()).snapshot()
        third_record = list(tree.main_line())[2]
        main, branch = (tree.node(h) for h in third_record.children)
        assert main.properties == {"W": "dp"}
        assert branch.properties == {"W": "qq"}
        assert branch.move_number == 4

        assert serialize_record(tree) == (
            HEADER + ";B[pd](;W[dd](;B[pp](;W[dp])(;W[qq](;B[cc])))))"
        )

    def test_branches_of_last_node_are_left_out(self) -> None:
        board = _board_with((Stone.BLACK, (15, 3)), (Stone.WHITE, (3, 3)))
        board.begin_try_play()
        board.place(Stone.BLACK, (16, 16))
        board.end_try_play()

        tree = RecordWriter(board.history, RecordSettings()).snapshot()
        assert len(tree) == 2

    def test_branches_of_root_are_left_out(self) -> None:
        board = RecordingBoard(19)
        board.begin_try_play()
        board.place(Stone.BLACK, (16, 16))
        board.end_try_play()
        board.place(Stone.BLACK, (15, 3))
        board.place(Stone.WHITE, (3, 3))

        tree = RecordWriter(board.history, RecordSettings()).snapshot()
        assert len(tree) == 2

    def test_long_game_snapshot(self) -> None:
        board = RecordingBoard(19)
        color = Stone.BLACK
        for idx in range(4000):
            board.place(color, (idx % 19, (idx // 19) % 19))
            color = color.opposite
        text = snapshot_text(board.history, RecordSettings())
        assert text.count(";") == 4001


class TestRoundTrip:
    def test_main_line_round_trips(self) -> None:
        board = _board_with(
            (Stone.BLACK, (15, 3)),
            (Stone.WHITE, (3, 3)),
            (Stone.BLACK, None),
            (Stone.WHITE, (0, 18)),
            (Stone.BLACK, (18, 0)),
            (Stone.WHITE, None),
        )
        board.history.node(2).stats = NodeStats(calculation_count=500)
        third = list(board.history.main_line())[2]
        board.history.set_current(third.handle)
        board.begin_try_play()
        board.place(Stone.WHITE, (9, 9))
        board.end_try_play()

        text = snapshot_text(board.history, RecordSettings())
        reloaded = RecordingBoard(19)
        read_record(parse_record(text), reloaded)

        expected = [(n.last_color, n.last_move) for n in board.history.main_line()]
        actual = [(n.last_color, n.last_move) for n in reloaded.history.main_line()]
        assert actual == expected
