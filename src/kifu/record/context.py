"""RecordContext: the history, board and settings of one record session.

Every load and save goes through a context value instead of ambient global
state. A context is not thread-safe; the Qt session keeps it on a single
worker thread, and tests drive it synchronously.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path

from kifu.core.enums import FailureKind
from kifu.core.errors import RecordError, RecordIOError, StateError
from kifu.game.board import RecordingBoard
from kifu.game.history import HistoryList
from kifu.game.settings import RecordSettings
from kifu.record.models import LoadReport, RecordTree
from kifu.record.reader import RecordReader
from kifu.record.sgf import parse_record, parse_record_bytes, serialize_record
from kifu.record.writer import RecordWriter

_LOGGER = logging.getLogger(__name__)
RECORD_SUFFIX = ".sgf"

# os.umask can only be queried by setting it; read once at import.
_UMASK = os.umask(0)
os.umask(_UMASK)


@dataclass(slots=True, frozen=True)
class OperationResult:
    """Outcome of a load or save, with the failure kind on error."""

    ok: bool
    kind: FailureKind | None = None
    message: str = ""
    report: LoadReport | None = None
    path: Path | None = None

    @classmethod
    def success(
        cls,
        *,
        report: LoadReport | None = None,
        path: Path | None = None,
    ) -> OperationResult:
        return cls(ok=True, report=report, path=path)

    @classmethod
    def failure(
        cls,
        error: RecordError,
        *,
        report: LoadReport | None = None,
        path: Path | None = None,
    ) -> OperationResult:
        return cls(
            ok=False,
            kind=error.kind,
            message=str(error),
            report=report,
            path=path,
        )


class RecordContext:
    """Owns the live history and board; loads and saves records."""

    __slots__ = ("_settings", "_board", "_komi")

    def __init__(self, settings: RecordSettings | None = None) -> None:
        self._settings = settings or RecordSettings()
        self._board: RecordingBoard | None = None
        self._komi = self._settings.komi

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> RecordSettings:
        return self._settings

    @property
    def is_initialized(self) -> bool:
        return self._board is not None

    @property
    def board(self) -> RecordingBoard:
        if self._board is None:
            raise StateError("No game has been started")
        return self._board

    @property
    def history(self) -> HistoryList:
        return self.board.history

    @property
    def komi(self) -> float:
        return self._komi

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, board_size: int | None = None) -> RecordingBoard:
        """Start an empty game, reusing the board so listeners stay attached."""
        if board_size is not None and board_size != self._settings.board_size:
            self._settings = replace(self._settings, board_size=board_size)
            self._board = None
        self._komi = self._settings.komi
        if self._board is None:
            self._board = RecordingBoard(self._settings.board_size)
        else:
            self._board.clear()
        return self._board

    # ── Loading ──────────────────────────────────────────────────────────

    def load_tree(self, tree: RecordTree) -> LoadReport:
        """Replace the current game with *tree*; raises on failure.

        The whole replay is one board batch. On failure the board keeps the
        operations applied before the error.
        """
        if self._board is None:
            self._board = RecordingBoard(self._settings.board_size)
        board = self._board
        self._komi = self._settings.komi
        reader = RecordReader(board, policy=self._settings.read_policy)
        with board.batch():
            board.clear()
            report = reader.read(tree)
        if report.komi is not None:
            self._komi = report.komi
        return report

    def load_from_text(self, text: str) -> OperationResult:
        try:
            report = self.load_tree(parse_record(text))
        except RecordError as exc:
            _LOGGER.warning("Cannot load record text: %s", exc)
            return OperationResult.failure(exc)
        _LOGGER.info("Loaded record text (%d moves)", report.placed_moves)
        return OperationResult.success(report=report)

    def load_from_path(self, path: Path) -> OperationResult:
        path = Path(path)
        try:
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise RecordIOError(f"Cannot read {path}: {exc}") from exc
            report = self.load_tree(parse_record_bytes(data))
        except RecordError as exc:
            _LOGGER.warning("Cannot load record %s: %s", path, exc)
            return OperationResult.failure(exc, path=path)
        _LOGGER.info("Loaded record %s (%d moves)", path.name, report.placed_moves)
        return OperationResult.success(report=report, path=path)

    # ── Saving ───────────────────────────────────────────────────────────

    def snapshot(self) -> RecordTree:
        settings = replace(self._settings, komi=self._komi)
        return RecordWriter(self.history, settings).snapshot()

    def snapshot_to_text(self) -> str:
        """Serialize the current game; raises :class:`StateError` before a game."""
        return serialize_record(self.snapshot())

    def save_to_path(self, path: Path) -> OperationResult:
        """Write the current game, appending ``.sgf`` when missing.

        The text goes to a temporary sibling first, so a failed save never
        leaves a partial file behind.
        """
        save_path = Path(path)
        if save_path.suffix.lower() != RECORD_SUFFIX:
            save_path = save_path.with_name(save_path.name + RECORD_SUFFIX)

        try:
            text = self.snapshot_to_text()
            _write_atomic(save_path, text)
        except RecordError as exc:
            _LOGGER.warning("Cannot save record %s: %s", save_path, exc)
            return OperationResult.failure(exc, path=save_path)
        _LOGGER.info("Saved record %s", save_path.name)
        return OperationResult.success(path=save_path)


def _file_mode(path: Path) -> int:
    """Mode for a saved record: keep an existing target's, else follow the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_UMASK


def _write_atomic(path: Path, text: str) -> None:
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(text)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise RecordIOError(f"Cannot write {path}: {exc}") from exc
