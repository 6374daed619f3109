# ------ src/hmm_tblout/tblout/reader.py -------------

"""
Lazy, forward-only reader over the data lines of a tblout table.

Each data line gives exactly one item: a Record, or the MalformedLine /
FieldParseError for that line. Comment and blank lines give nothing. A failing
source (missing file, read or decode error) raises TbloutIOError and ends the
iteration.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, Union

from hmm_tblout.errors import FieldParseError, MalformedLine, TbloutError, TbloutIOError
from hmm_tblout.tblout._parse import COMMENT, Dialect, LineKind, classify_line
from hmm_tblout.tblout.record import Record, parse_line
from hmm_tblout.utility import utils

L = logging.getLogger(__name__)

__all__ = ["Reader", "OwnedRecords", "RecordResult", "READER_DEFAULTS"]

RecordResult = Union[Record, MalformedLine, FieldParseError]

READER_DEFAULTS: dict[str, Any] = {"encoding": "utf-8", "errors": "strict", "comment": COMMENT}


class Reader:
    """
    Wrap a line source (open text/binary handle or any iterable of lines).

    records() / iter(reader) borrow the source: the reader keeps it and a later
    call carries on from the same cursor. into_records() hands the source to an
    OwnedRecords iterator, which closes it.
    """

    def __init__(
        self,
        source: IO[str] | IO[bytes] | Iterable[str | bytes],
        *,
        comment: str = COMMENT,
        encoding: str = "utf-8",
        errors: str = "strict",
        name: str | None = None,
        owns_source: bool = False,
    ):
        if isinstance(source, (str, bytes, bytearray)):
            raise TypeError(
                "Reader wants a file handle or an iterable of lines, not the table text "
                "itself; wrap it in io.StringIO / io.BytesIO or use Reader.from_path()"
            )
        self._source = source
        self._lines = iter(source)
        self.comment = comment
        self.encoding = encoding
        self.errors = errors
        self.name = name or getattr(source, "name", "<stream>")
        self._owns_source = owns_source
        self._line_no = 0
        self._dialect: Dialect | None = None
        self._done = False
        self._handed_off = False

    # ---- construction --------------------------------------------------
    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        encoding: str | None = None,
        errors: str | None = None,
        config: dict | None = None,
    ) -> "Reader":
        """
        Open path and read it. Settings come from explicit args, then the
        'reader' section of config (config/config.yaml when config is None),
        then READER_DEFAULTS.
        """
        opts = {**READER_DEFAULTS, **utils.section("reader", config)}
        if encoding is not None:
            opts["encoding"] = encoding
        if errors is not None:
            opts["errors"] = errors

        p = Path(path).expanduser()
        try:
            fh = p.open("r", encoding=opts["encoding"], errors=opts["errors"])
        except OSError as exc:
            raise TbloutIOError(f"cannot open {p}: {exc.strerror or exc}") from exc

        L.debug("Opened %s (encoding=%s)", p, opts["encoding"])
        return cls(fh, comment=opts["comment"], encoding=opts["encoding"],
                   errors=opts["errors"], name=str(p), owns_source=True)

    # ---- state ---------------------------------------------------------
    @property
    def line_no(self) -> int:
        """Physical lines consumed so far (comments and blanks included)."""
        return self._line_no

    @property
    def dialect(self) -> Dialect | None:
        """Dialect of the first record read, None before that."""
        return self._dialect

    def close(self) -> None:
        self._done = True
        if self._owns_source and hasattr(self._source, "close"):
            self._source.close()

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---- iteration -----------------------------------------------------
    def __iter__(self) -> Iterator[RecordResult]:
        return self.records()

    def records(self) -> Iterator[RecordResult]:
        """Borrowed iteration over the remaining data lines."""
        if self._handed_off:
            raise TbloutError(f"{self.name}: source was handed to into_records()")
        return self._iter_results()

    def into_records(self) -> "OwnedRecords":
        """
        Owned iteration: the returned iterator closes the source once it is
        exhausted, closed, or garbage collected, even if it was never started.
        """
        if self._handed_off:
            raise TbloutError(f"{self.name}: source was handed to into_records()")
        self._handed_off = True
        self._owns_source = True
        return OwnedRecords(self)

    def _iter_results(self) -> Iterator[RecordResult]:
        while True:
            line = self._next_line()
            if line is None:
                return
            if classify_line(line, self.comment) is LineKind.SKIP:
                continue
            try:
                record = parse_line(line, self._line_no)
            except (MalformedLine, FieldParseError) as exc:
                yield exc
                continue
            self._note_dialect(record)
            yield record

    def _next_line(self) -> str | None:
        if self._done:
            return None
        try:
            raw = next(self._lines)
        except StopIteration:
            self._done = True
            L.debug("%s: end of input after %d lines", self.name, self._line_no)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            self._done = True
            raise TbloutIOError(f"{self.name}: read failed: {exc}", line_no=self._line_no + 1) from exc

        self._line_no += 1
        if isinstance(raw, bytes):
            try:
                raw = raw.decode(self.encoding, self.errors)
            except UnicodeDecodeError as exc:
                self._done = True
                raise TbloutIOError(f"{self.name}: cannot decode line", line_no=self._line_no) from exc
        return raw

    def _note_dialect(self, record: Record) -> None:
        if self._dialect is None:
            self._dialect = record.dialect
            L.debug("%s: reading %s table", self.name, record.dialect.value)
        elif record.dialect is not self._dialect:
            L.warning("%s line %d: %s record in a %s table",
                      self.name, self._line_no, record.dialect.value, self._dialect.value)


class OwnedRecords:
    """Iterator returned by Reader.into_records(); it owns and closes the source."""

    def __init__(self, reader: Reader):
        self._reader = reader
        self._results = reader._iter_results()

    def __iter__(self) -> "OwnedRecords":
        return self

    def __next__(self) -> RecordResult:
        try:
            return next(self._results)
        except (StopIteration, TbloutIOError):
            # both end the iteration
            self.close()
            raise

    def close(self) -> None:
        self._results.close()
        self._reader.close()

    def __enter__(self) -> "OwnedRecords":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __del__(self) -> None:
        self.close()
