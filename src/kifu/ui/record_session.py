"""Background record load/save orchestration for the UI thread."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from kifu.core.enums import FailureKind
from kifu.core.errors import RecordError
from kifu.game.settings import RecordSettings
from kifu.record.context import OperationResult, RecordContext

_LOGGER = logging.getLogger(__name__)


class _RecordCommandBus(QObject):
    load_path_requested = pyqtSignal(int, str)
    load_text_requested = pyqtSignal(int, str)
    save_path_requested = pyqtSignal(int, str)
    snapshot_requested = pyqtSignal(int)


class _RecordWorker(QObject):
    """Owns the :class:`RecordContext`; every slot runs on the worker thread."""

    loaded = pyqtSignal(int, object)  # request_id, OperationResult
    saved = pyqtSignal(int, object)  # request_id, OperationResult
    snapshot_ready = pyqtSignal(int, str)  # request_id, record text
    failed = pyqtSignal(int, str, str)  # request_id, kind, message

    __slots__ = ("_context",)

    def __init__(self, context: RecordContext) -> None:
        super().__init__()
        self._context = context

    @pyqtSlot(int, str)
    def load_path(self, request_id: int, path: str) -> None:
        self._emit_result(self.loaded, request_id, self._context.load_from_path(Path(path)))

    @pyqtSlot(int, str)
    def load_text(self, request_id: int, text: str) -> None:
        self._emit_result(self.loaded, request_id, self._context.load_from_text(text))

    @pyqtSlot(int, str)
    def save_path(self, request_id: int, path: str) -> None:
        self._emit_result(self.saved, request_id, self._context.save_to_path(Path(path)))

    @pyqtSlot(int)
    def snapshot(self, request_id: int) -> None:
        try:
            text = self._context.snapshot_to_text()
        except RecordError as exc:
            self.failed.emit(request_id, str(exc.kind), str(exc))
            return
        except Exception as exc:
            _LOGGER.exception("Record snapshot failed")
            self.failed.emit(request_id, str(FailureKind.STATE), str(exc))
            return
        self.snapshot_ready.emit(request_id, text)

    def _emit_result(
        self,
        signal: pyqtSignal,
        request_id: int,
        result: OperationResult,
    ) -> None:
        if result.ok:
            signal.emit(request_id, result)
            return
        self.failed.emit(request_id, str(result.kind), result.message)


class RecordSession:
    """Owns worker-thread lifecycle for record load/save requests.

    Requests are queued onto one worker thread in submission order, so the
    shared history is only ever touched by that thread.
    """

    __slots__ = (
        "__weakref__",
        "_on_loaded",
        "_on_saved",
        "_on_snapshot",
        "_on_failed",
        "_context",
        "_command_bus",
        "_thread",
        "_worker",
        "_is_started",
        "_is_wired",
        "_is_shutting_down",
        "_pending_requests",
        "_next_request_id",
    )

    def __init__(
        self,
        *,
        on_loaded: Callable[[OperationResult], None],
        on_saved: Callable[[OperationResult], None],
        on_snapshot: Callable[[str], None],
        on_failed: Callable[[FailureKind, str], None],
        settings: RecordSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._on_loaded = on_loaded
        self._on_saved = on_saved
        self._on_snapshot = on_snapshot
        self._on_failed = on_failed

        self._context = RecordContext(settings)
        self._command_bus = _RecordCommandBus(parent)
        self._thread = QThread(parent)
        self._worker = _RecordWorker(self._context)
        self._is_started = False
        self._is_wired = False
        self._is_shutting_down = False
        self._pending_requests: dict[int, Callable[[str], None] | None] = {}
        self._next_request_id = 0

    @property
    def context(self) -> RecordContext:
        """The worker-owned context. Only touch it while the worker is idle."""
        return self._context

    def setup(self) -> None:
        """Start worker thread and connect cross-thread signals."""
        if self._is_started:
            return
        self._is_shutting_down = False
        if not self._is_wired:
            self._wire()
        self._thread.start()
        self._is_started = True

    def _wire(self) -> None:
        self._worker.moveToThread(self._thread)
        self._command_bus.load_path_requested.connect(self._worker.load_path)
        self._command_bus.load_text_requested.connect(self._worker.load_text)
        self._command_bus.save_path_requested.connect(self._worker.save_path)
        self._command_bus.snapshot_requested.connect(self._worker.snapshot)
        self._worker.loaded.connect(self._on_worker_loaded)
        self._worker.saved.connect(self._on_worker_saved)
        self._worker.snapshot_ready.connect(self._on_worker_snapshot)
        self._worker.failed.connect(self._on_worker_failed)
        self._is_wired = True

    def shutdown(self) -> None:
        """Stop the worker thread; replies still in flight are dropped."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self._thread.quit()
        self._thread.wait(2000)
        self._pending_requests.clear()
        self._is_started = False

    def load_from_path(self, path: Path) -> int | None:
        return self._submit(self._command_bus.load_path_requested, str(path))

    def load_from_text(self, text: str) -> int | None:
        return self._submit(self._command_bus.load_text_requested, text)

    def save_to_path(self, path: Path) -> int | None:
        return self._submit(self._command_bus.save_path_requested, str(path))

    def request_snapshot(
        self,
        on_ready: Callable[[str], None] | None = None,
    ) -> int | None:
        """Queue a snapshot; *on_ready* overrides ``on_snapshot`` for this call."""
        request_id = self._reserve(on_ready)
        if request_id is None:
            return None
        self._command_bus.snapshot_requested.emit(request_id)
        return request_id

    def _reserve(self, on_snapshot: Callable[[str], None] | None = None) -> int | None:
        if not self._is_started:
            self.setup()
        if self._is_shutting_down:
            return None
        self._next_request_id += 1
        self._pending_requests[self._next_request_id] = on_snapshot
        return self._next_request_id

    def _submit(self, signal: pyqtSignal, payload: str) -> int | None:
        request_id = self._reserve()
        if request_id is None:
            return None
        signal.emit(request_id, payload)
        return request_id

    def _is_pending(self, request_id: int) -> bool:
        return not self._is_shutting_down and request_id in self._pending_requests

    def _on_worker_loaded(self, request_id: int, result_obj: object) -> None:
        if not self._is_pending(request_id):
            return
        del self._pending_requests[request_id]
        if not isinstance(result_obj, OperationResult):
            self._on_failed(FailureKind.STATE, "Record worker produced invalid result")
            return
        self._on_loaded(result_obj)

    def _on_worker_saved(self, request_id: int, result_obj: object) -> None:
        if not self._is_pending(request_id):
            return
        del self._pending_requests[request_id]
        if not isinstance(result_obj, OperationResult):
            self._on_failed(FailureKind.STATE, "Record worker produced invalid result")
            return
        self._on_saved(result_obj)

    def _on_worker_snapshot(self, request_id: int, text: str) -> None:
        if not self._is_pending(request_id):
            return
        on_ready = self._pending_requests.pop(request_id)
        (on_ready or self._on_snapshot)(text)

    def _on_worker_failed(self, request_id: int, kind: str, message: str) -> None:
        if not self._is_pending(request_id):
            return
        del self._pending_requests[request_id]
        self._on_failed(FailureKind(kind), message)
