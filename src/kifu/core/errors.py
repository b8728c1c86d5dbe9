"""Error taxonomy shared by the record reader, writer and session."""

from __future__ import annotations

from kifu.core.enums import FailureKind


class RecordError(Exception):
    """Base class for all record-handling failures."""

    kind: FailureKind = FailureKind.FORMAT


class FormatError(RecordError, ValueError):
    """Unrecognized coordinate token, malformed property or document."""

    kind = FailureKind.FORMAT


class BoundsError(RecordError, ValueError):
    """Decoded coordinate lies outside the board."""

    kind = FailureKind.BOUNDS


class RecordIOError(RecordError, OSError):
    """Reading or writing a record file failed."""

    kind = FailureKind.IO


class StateError(RecordError, RuntimeError):
    """Operation requires an initialized history."""

    kind = FailureKind.STATE
