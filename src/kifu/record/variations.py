"""Variation embedder: turns side branches into sibling record subtrees.

Two sources feed the same routine: try-play branches the user explored, and
engine candidate lines. The filtering policy for both lives in
:func:`embed_branches`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from kifu.core.enums import Stone
from kifu.game.history import CandidateLine, HistoryList, HistoryNode
from kifu.record.models import RecordTree
from kifu.record.properties import (
    history_node_properties,
    move_property,
    winrate_comment,
)

CANDIDATE_MIN_PLAYOUTS = 200
MAX_CANDIDATE_BRANCHES = 5


@dataclass(slots=True, frozen=True)
class TryPlay:
    """A recorded try-play branch, identified by its head node handle."""

    head: int


@dataclass(slots=True, frozen=True)
class Candidate:
    """An engine candidate continuation."""

    line: CandidateLine


BranchSource: TypeAlias = TryPlay | Candidate


def branch_sources(node: HistoryNode, *, include_candidates: bool) -> list[BranchSource]:
    """Try-play branches of *node*, then (optionally) its candidate lines."""
    sources: list[BranchSource] = [TryPlay(head) for head in node.try_plays]
    if include_candidates:
        sources.extend(Candidate(line) for line in node.candidates)
    return sources


def embed_branches(
    tree: RecordTree,
    base_handle: int,
    base_node: HistoryNode,
    sources: list[BranchSource],
    *,
    history: HistoryList,
    board_size: int,
    variation_limit: int,
) -> int:
    """Attach one child subtree of *base_handle* per accepted source.

    Try-plays are embedded whole. Candidates need more than
    ``CANDIDATE_MIN_PLAYOUTS`` playouts, at most ``MAX_CANDIDATE_BRANCHES``
    are taken in ranking order, and each is cut at *variation_limit* moves.
    Returns the number of subtrees added.
    """
    added = 0
    candidates = 0
    for source in sources:
        if isinstance(source, TryPlay):
            _embed_try_play(tree, base_handle, source.head, history, board_size)
            added += 1
        elif isinstance(source, Candidate):
            if candidates >= MAX_CANDIDATE_BRANCHES:
                continue
            if source.line.playouts <= CANDIDATE_MIN_PLAYOUTS:
                continue
            if _embed_candidate(
                tree, base_handle, base_node, source.line, board_size, variation_limit
            ):
                candidates += 1
                added += 1
    return added


def _embed_try_play(
    tree: RecordTree,
    base_handle: int,
    head: int,
    history: HistoryList,
    board_size: int,
) -> None:
    parent = base_handle
    for node in history.chain(head):
        record = tree.new_node(parent, history_node_properties(node, board_size))
        if node.move_number > 0:
            record.move_number = node.move_number
        parent = record.handle


def _embed_candidate(
    tree: RecordTree,
    base_handle: int,
    base_node: HistoryNode,
    line: CandidateLine,
    board_size: int,
    variation_limit: int,
) -> bool:
    moves = line.moves[: max(0, variation_limit)]
    if not moves:
        return False

    color = Stone.BLACK if base_node.last_color is None else base_node.last_color.opposite
    move_number = base_node.move_number
    parent = base_handle
    for idx, coord in enumerate(moves):
        key, token = move_property(color, coord, board_size)
        props = {key: token}
        if idx == 0:
            if color == Stone.BLACK:
                black, white = line.winrate, 100.0 - line.winrate
            else:
                white, black = line.winrate, 100.0 - line.winrate
            props["C"] = winrate_comment(black, white)
        move_number += 1
        record = tree.new_node(parent, props)
        record.move_number = move_number
        parent = record.handle
        color = color.opposite
    return True
