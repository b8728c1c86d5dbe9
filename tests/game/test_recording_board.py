"""Tests for RecordingBoard."""

import pytest

from kifu.core.enums import Stone
from kifu.core.errors import BoundsError
from kifu.game.board import RecordingBoard
from kifu.game.history import HistoryNode


class TestRecordingBoard:
    def test_place_records_history(self) -> None:
        board = RecordingBoard(19)
        board.place(Stone.BLACK, (15, 3))
        current = board.history.current
        assert current.last_color == Stone.BLACK
        assert current.last_move == (15, 3)
        assert board.stones() == {(15, 3): Stone.BLACK}

    def test_place_off_board_raises(self) -> None:
        board = RecordingBoard(9)
        with pytest.raises(BoundsError):
            board.place(Stone.BLACK, (9, 0))
        assert len(board.history) == 1

    def test_pass_leaves_no_stone(self) -> None:
        board = RecordingBoard(19)
        board.pass_turn(Stone.BLACK)
        assert board.history.current.is_pass
        assert board.stones() == {}
        assert board.next_color == Stone.WHITE

    def test_stones_follow_current_position(self) -> None:
        board = RecordingBoard(19)
        board.place(Stone.BLACK, (15, 3))
        board.place(Stone.WHITE, (3, 3))
        board.history.previous()
        assert board.stones_of(Stone.WHITE) == []
        assert board.stones_of(Stone.BLACK) == [(15, 3)]

    def test_clear(self) -> None:
        board = RecordingBoard(19)
        board.place(Stone.BLACK, (15, 3))
        board.clear()
        assert board.stones() == {}
        assert board.next_color == Stone.BLACK


class TestRecordingBoardEvents:
    def test_each_move_notifies(self) -> None:
        board = RecordingBoard(19)
        seen: list[HistoryNode] = []
        board.events.on_changed.append(seen.append)
        board.place(Stone.BLACK, (15, 3))
        board.place(Stone.WHITE, (3, 3))
        assert len(seen) == 2

    def test_batch_notifies_once_with_final_position(self) -> None:
        board = RecordingBoard(19)
        seen: list[HistoryNode] = []
        board.events.on_changed.append(seen.append)
        with board.batch():
            board.clear()
            board.place(Stone.BLACK, (15, 3))
            with board.batch():
                board.place(Stone.WHITE, (3, 3))
            assert seen == []
        assert len(seen) == 1
        assert seen[0].last_move == (3, 3)

    def test_empty_batch_is_silent(self) -> None:
        board = RecordingBoard(19)
        seen: list[HistoryNode] = []
        board.events.on_changed.append(seen.append)
        with board.batch():
            pass
        assert seen == []

    def test_batch_flushes_on_error(self) -> None:
        board = RecordingBoard(19)
        seen: list[HistoryNode] = []
        board.events.on_changed.append(seen.append)
        with pytest.raises(BoundsError):
            with board.batch():
                board.place(Stone.BLACK, (15, 3))
                board.place(Stone.WHITE, (30, 3))
        assert len(seen) == 1


class TestTryPlay:
    def test_try_play_branch_and_return(self) -> None:
        board = RecordingBoard(19)
        board.place(Stone.BLACK, (15, 3))
        base = board.history.current
        board.begin_try_play()
        assert board.is_trying
        board.place(Stone.WHITE, (16, 16))
        board.place(Stone.BLACK, (2, 2))
        board.end_try_play()

        assert not board.is_trying
        assert board.history.current is base
        assert len(base.try_plays) == 1
        assert base.next is None
        branch = list(board.history.chain(base.try_plays[0]))
        assert [n.last_move for n in branch] == [(16, 16), (2, 2)]

    def test_second_try_play_starts_new_branch(self) -> None:
        board = RecordingBoard(19)
        board.place(Stone.BLACK, (15, 3))
        base = board.history.current
        for point in ((16, 16), (2, 2)):
            board.begin_try_play()
            board.place(Stone.WHITE, point)
            board.end_try_play()
        assert len(base.try_plays) == 2

    def test_end_without_begin_is_noop(self) -> None:
        board = RecordingBoard(19)
        board.end_try_play()
        assert board.history.current is board.history.root
