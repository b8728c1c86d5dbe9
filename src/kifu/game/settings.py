"""User-configurable record settings."""

from __future__ import annotations

from dataclasses import dataclass

from kifu.core.enums import ReadPolicy


@dataclass
class RecordSettings:
    """All settings the record reader and writer consult."""

    # Board
    board_size: int = 19
    komi: float = 7.5

    # Variations
    variation_limit: int = 10  # max moves per embedded candidate line
    embed_candidate_lines: bool = False

    # Reader
    read_policy: ReadPolicy = ReadPolicy.LENIENT

    # Output
    app_name: str = "kifu"
