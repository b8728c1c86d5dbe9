"""Abstract interfaces for the game layer.

The record reader depends on :class:`IBoard`, not on a concrete board, so the
orchestrator can plug in a board that forwards moves to an engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from kifu.core.enums import Stone
from kifu.core.types import Coordinate


class IBoard(ABC):
    """Minimal board contract used while replaying a record."""

    @property
    @abstractmethod
    def board_size(self) -> int: ...

    @abstractmethod
    def place(self, stone: Stone, coord: Coordinate) -> None:
        """Put *stone* at *coord*. Raises ``BoundsError`` off the board."""

    @abstractmethod
    def pass_turn(self, stone: Stone) -> None:
        """Record a pass by *stone*."""

    @abstractmethod
    def clear(self) -> None:
        """Reset to an empty board and a fresh history."""

    @abstractmethod
    def batch(self) -> AbstractContextManager[None]:
        """Group operations so observers see only the final position."""
