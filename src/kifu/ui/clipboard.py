"""Clipboard copy/paste of whole game records."""

from __future__ import annotations

from PyQt6.QtGui import QGuiApplication

from kifu.ui.record_session import RecordSession


def copy_game_to_clipboard(session: RecordSession) -> int | None:
    """Snapshot the current game on the worker and put the text on the clipboard."""
    return session.request_snapshot(
        on_ready=lambda text: QGuiApplication.clipboard().setText(text)
    )


def paste_game_from_clipboard(session: RecordSession) -> int | None:
    """Load the clipboard text as a record; ``None`` when the clipboard is empty."""
    text = QGuiApplication.clipboard().text()
    if not text.strip():
        return None
    return session.load_from_text(text)
