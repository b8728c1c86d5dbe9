"""Coordinate type alias and board-geometry helpers.

Coordinates are ``(x, y)`` pairs with ``0 <= x, y < board_size``.
A pass is the sentinel ``(board_size, board_size)``.
"""

from __future__ import annotations

from typing import TypeAlias

Coordinate: TypeAlias = tuple[int, int]

MIN_BOARD_SIZE = 1
MAX_BOARD_SIZE = 51  # alphabet covers indices 0..51, the last one is pass


def pass_coordinate(board_size: int) -> Coordinate:
    """Pass sentinel for *board_size*."""
    return (board_size, board_size)


def is_pass(coord: Coordinate, board_size: int) -> bool:
    return coord == (board_size, board_size)


def is_on_board(coord: Coordinate, board_size: int) -> bool:
    """Check whether *coord* is a playable point."""
    x, y = coord
    return 0 <= x < board_size and 0 <= y < board_size


def is_valid_board_size(board_size: int) -> bool:
    return MIN_BOARD_SIZE <= board_size <= MAX_BOARD_SIZE
