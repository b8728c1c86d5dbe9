"""Record writer: snapshots the live history into a :class:`RecordTree`."""

from __future__ import annotations

from kifu.game.history import HistoryList, HistoryNode
from kifu.game.settings import RecordSettings
from kifu.record.models import RecordTree
from kifu.record.properties import history_node_properties
from kifu.record.sgf import serialize_record
from kifu.record.variations import branch_sources, embed_branches

RECORD_FORMAT_VERSION = "4"


def _format_komi(komi: float) -> str:
    return f"{komi:g}"


class RecordWriter:
    """Builds a record tree from a :class:`HistoryList`.

    The main line becomes the first-child chain. Each node's side branches
    are attached to its record node after the main child, once that main
    child exists. The root's and the final node's branches are left out,
    since either would become the main line when the record is read back.
    """

    __slots__ = ("_history", "_settings")

    def __init__(self, history: HistoryList, settings: RecordSettings) -> None:
        self._history = history
        self._settings = settings

    def root_properties(self) -> dict[str, str]:
        s = self._settings
        return {
            "FF": RECORD_FORMAT_VERSION,
            "KM": _format_komi(s.komi),
            "GM": "1",
            "SZ": str(s.board_size),
            "CA": "UTF-8",
            "AP": s.app_name,
        }

    def snapshot(self) -> RecordTree:
        size = self._settings.board_size
        tree = RecordTree(self.root_properties())

        previous_handle: int | None = None
        previous_node: HistoryNode | None = None
        for node in self._history.main_line():
            record = tree.new_node(previous_handle, history_node_properties(node, size))
            if node.move_number > 0:
                record.move_number = node.move_number

            if previous_handle is not None and previous_node is not None:
                self._embed(tree, previous_handle, previous_node)

            previous_handle = record.handle
            previous_node = node
        return tree

    def _embed(self, tree: RecordTree, handle: int, node: HistoryNode) -> None:
        sources = branch_sources(
            node, include_candidates=self._settings.embed_candidate_lines
        )
        if not sources:
            return
        embed_branches(
            tree,
            handle,
            node,
            sources,
            history=self._history,
            board_size=self._settings.board_size,
            variation_limit=self._settings.variation_limit,
        )


def snapshot_text(history: HistoryList, settings: RecordSettings) -> str:
    """Serialize *history* straight to record text."""
    return serialize_record(RecordWriter(history, settings).snapshot())
