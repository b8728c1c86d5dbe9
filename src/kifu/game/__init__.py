"""Game layer: live history tree, recording board and settings.

Quick start::

    from kifu.core import Stone
    from kifu.game import RecordingBoard

    board = RecordingBoard(19)
    board.place(Stone.BLACK, (15, 3))
    board.pass_turn(Stone.WHITE)
"""

from kifu.game.board import BoardEvents, RecordingBoard
from kifu.game.history import (
    ROOT_HANDLE,
    CandidateLine,
    HistoryList,
    HistoryNode,
    NodeStats,
)
from kifu.game.interfaces import IBoard
from kifu.game.settings import RecordSettings

__all__ = [
    # Interfaces
    "IBoard",
    # Concrete
    "BoardEvents",
    "CandidateLine",
    "HistoryList",
    "HistoryNode",
    "NodeStats",
    "ROOT_HANDLE",
    "RecordSettings",
    "RecordingBoard",
]
