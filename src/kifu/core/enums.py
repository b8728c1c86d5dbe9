"""Core enumerations for the stone-game domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Stone(IntEnum):
    """Stone color."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Stone:
        return Stone(1 - self.value)

    @property
    def sgf_key(self) -> str:
        """Record-format move property key (``B`` / ``W``)."""
        return "B" if self == Stone.BLACK else "W"

    def __str__(self) -> str:
        return self.name.lower()


class ReadPolicy(StrEnum):
    """How the record reader treats a single malformed move."""

    LENIENT = "lenient"  # skip the move, keep walking
    STRICT = "strict"  # abort the walk


class FailureKind(StrEnum):
    """Document-level failure categories reported to the orchestrator."""

    FORMAT = "format"
    BOUNDS = "bounds"
    IO = "io"
    STATE = "state"
