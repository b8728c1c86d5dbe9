"""Record package: SGF tree model, text codec, reader, writer and variations."""

from kifu.record.context import OperationResult, RecordContext
from kifu.record.models import LoadReport, RecordNode, RecordTree
from kifu.record.reader import RecordReader, read_record
from kifu.record.replayer import MoveReplayer
from kifu.record.sgf import parse_record, parse_record_bytes, serialize_record
from kifu.record.variations import (
    BranchSource,
    Candidate,
    TryPlay,
    branch_sources,
    embed_branches,
)
from kifu.record.writer import RecordWriter, snapshot_text

__all__ = [
    # Session value
    "OperationResult",
    "RecordContext",
    # Models
    "LoadReport",
    "RecordNode",
    "RecordTree",
    # Text codec
    "parse_record",
    "parse_record_bytes",
    "serialize_record",
    # Reading
    "MoveReplayer",
    "RecordReader",
    "read_record",
    # Writing
    "BranchSource",
    "Candidate",
    "RecordWriter",
    "TryPlay",
    "branch_sources",
    "embed_branches",
    "snapshot_text",
]
