"""Property builders shared by the record writer and variation embedder."""

from __future__ import annotations

from kifu.core.coords import coordinate_to_sgf
from kifu.core.enums import Stone
from kifu.core.types import Coordinate
from kifu.game.history import HistoryNode

COMMENT_MIN_CALCULATIONS = 100


def winrate_comment(black_winrate: float, white_winrate: float) -> str:
    return f"Black: {black_winrate:.1f}; White: {white_winrate:.1f}"


def move_property(
    color: Stone,
    coord: Coordinate | None,
    board_size: int,
) -> tuple[str, str]:
    """``(key, token)`` for a move; pass and off-board points use the sentinel."""
    return color.sgf_key, coordinate_to_sgf(coord, board_size)


def history_node_properties(node: HistoryNode, board_size: int) -> dict[str, str]:
    """Move and comment properties for a live history node."""
    props: dict[str, str] = {}
    if node.last_color is None:
        return props
    key, token = move_property(node.last_color, node.last_move, board_size)
    props[key] = token
    if node.stats.calculation_count > COMMENT_MIN_CALCULATIONS:
        props["C"] = winrate_comment(
            node.stats.black_winrate, node.stats.white_winrate
        )
    return props
