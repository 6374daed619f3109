# src/hmm_tblout/errors.py

"""
Errors raised (or yielded) while reading a tblout table.

Only TbloutIOError ends an iteration. MalformedLine and FieldParseError
belong to one line and the Reader hands them back as items so the caller
decides whether to stop, skip or collect them.
"""

from __future__ import annotations

__all__ = ["TbloutError", "TbloutIOError", "MalformedLine", "FieldParseError"]


class TbloutError(Exception):
    """Base class for every tblout parsing problem."""

    def __init__(self, message: str, *, line_no: int | None = None, line: str | None = None):
        self.message = message
        self.line_no = line_no
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.line_no is None:
            return self.message
        return f"line {self.line_no}: {self.message}"


class TbloutIOError(TbloutError, OSError):
    """The underlying line source failed (missing file, read or decode error)."""


class MalformedLine(TbloutError, ValueError):
    """A data line whose columns match neither the nhmmer nor the Infernal layout."""


class FieldParseError(TbloutError, ValueError):
    """A numeric or strand column held text that does not parse."""

    def __init__(self, field: str, token: str, *, line_no: int | None = None, line: str | None = None):
        self.field = field
        self.token = token
        super().__init__(f"column {field!r} could not parse {token!r}", line_no=line_no, line=line)
