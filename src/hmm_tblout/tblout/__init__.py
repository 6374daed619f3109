from __future__ import annotations

from hmm_tblout.tblout._parse import (
    Dialect, Layout, LineKind, classify_line, detect_layout, split_fixed,
)
from hmm_tblout.tblout.record import Record, Strand, parse_line
from hmm_tblout.tblout.reader import Reader, RecordResult

__all__ = [
    "Dialect", "Layout", "LineKind", "classify_line", "detect_layout", "split_fixed",
    "Record", "Strand", "parse_line", "Reader", "RecordResult",
]
