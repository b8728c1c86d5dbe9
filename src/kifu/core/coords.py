"""Coordinate codec: integer points <-> two-letter record tokens."""

from __future__ import annotations

from string import ascii_lowercase, ascii_uppercase

from kifu.core.errors import FormatError
from kifu.core.types import Coordinate, is_on_board, pass_coordinate

ALPHABET = ascii_lowercase + ascii_uppercase
_INDEX = {ch: idx for idx, ch in enumerate(ALPHABET)}


def _axis_char(value: int) -> str:
    if not 0 <= value < len(ALPHABET):
        raise FormatError(f"Coordinate value out of alphabet range: {value}")
    return ALPHABET[value]


def coordinate_to_token(x: int, y: int) -> str:
    """Encode ``(x, y)`` as a record token, X first, e.g. ``(15, 3)`` -> ``'pd'``."""
    return _axis_char(x) + _axis_char(y)


def token_to_coordinate(token: str) -> Coordinate:
    """Decode a two-letter record token into ``(x, y)``."""
    if len(token) != 2 or token[0] not in _INDEX or token[1] not in _INDEX:
        raise FormatError(f"Invalid coordinate token: {token!r}")
    return _INDEX[token[0]], _INDEX[token[1]]


def coordinate_to_sgf(coord: Coordinate | None, board_size: int) -> str:
    """Encode a move; ``None`` and off-board points become the pass token."""
    if coord is None or not is_on_board(coord, board_size):
        coord = pass_coordinate(board_size)
    return coordinate_to_token(*coord)


def sgf_to_coordinate(token: str, board_size: int) -> Coordinate:
    """Decode a move token; the empty FF[4] pass value maps to the sentinel."""
    token = token.strip()
    if not token:
        return pass_coordinate(board_size)
    return token_to_coordinate(token)


def split_point_list(value: str) -> list[str]:
    """Split a comma-separated setup-stone list into stripped tokens."""
    return [part.strip() for part in value.split(",") if part.strip()]
