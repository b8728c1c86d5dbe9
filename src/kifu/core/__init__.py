"""Core domain layer: stones, coordinates, codec and error types.

Quick start::

    from kifu.core import coordinate_to_token, token_to_coordinate

    token = coordinate_to_token(15, 3)   # 'pd'
    assert token_to_coordinate(token) == (15, 3)
"""

from kifu.core.coords import (
    ALPHABET,
    coordinate_to_sgf,
    coordinate_to_token,
    sgf_to_coordinate,
    split_point_list,
    token_to_coordinate,
)
from kifu.core.enums import FailureKind, ReadPolicy, Stone
from kifu.core.errors import (
    BoundsError,
    FormatError,
    RecordError,
    RecordIOError,
    StateError,
)
from kifu.core.types import (
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    Coordinate,
    is_on_board,
    is_pass,
    is_valid_board_size,
    pass_coordinate,
)

__all__ = [
    # Enums
    "FailureKind",
    "ReadPolicy",
    "Stone",
    # Types / helpers
    "Coordinate",
    "MAX_BOARD_SIZE",
    "MIN_BOARD_SIZE",
    "is_on_board",
    "is_pass",
    "is_valid_board_size",
    "pass_coordinate",
    # Codec
    "ALPHABET",
    "coordinate_to_sgf",
    "coordinate_to_token",
    "sgf_to_coordinate",
    "split_point_list",
    "token_to_coordinate",
    # Errors
    "BoundsError",
    "FormatError",
    "RecordError",
    "RecordIOError",
    "StateError",
]
