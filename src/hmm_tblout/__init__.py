# Re-export the reader API so callers can
# from hmm_tblout import Reader, Strand
from hmm_tblout.errors import FieldParseError, MalformedLine, TbloutError, TbloutIOError
from hmm_tblout.tblout import (
    Dialect, LineKind, Reader, Record, RecordResult, Strand,
    classify_line, detect_layout, parse_line, split_fixed,
)

__all__ = [
    "Reader", "Record", "RecordResult", "Strand", "Dialect", "LineKind",
    "classify_line", "detect_layout", "split_fixed", "parse_line",
    "TbloutError", "TbloutIOError", "MalformedLine", "FieldParseError",
]

__version__ = "0.1.0" # bump in version will update
