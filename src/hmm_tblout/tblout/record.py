# ------ src/hmm_tblout/tblout/record.py -------------

"""
Typed, immutable view over one tblout data line.

Every column the layout declares is parsed when the Record is built, so once
you hold a Record none of its attributes can fail. Columns that only one
layout carries are None elsewhere: env_from / env_to and sq_len are missing
from cmsearch/cmscan tables, and mdl, trunc, pipeline_pass, gc and inc only
exist there. Always check those for None before using them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from hmm_tblout.errors import FieldParseError
from hmm_tblout.tblout._parse import Dialect, Layout, detect_layout, is_float, is_int, split_fixed

__all__ = ["Strand", "Record", "parse_line", "INT_COLS", "FLOAT_COLS", "OPTIONAL_COLS"]

INT_COLS = ("hmm_from", "hmm_to", "ali_from", "ali_to", "env_from", "env_to", "sq_len", "pipeline_pass")
FLOAT_COLS = ("e_value", "score", "bias", "gc")
_ACCESSION_COLS = ("target_accession", "query_accession")
NO_ACCESSION = "-"

# None unless the layout has the column
OPTIONAL_COLS = ("strand", "env_from", "env_to", "sq_len", "mdl", "trunc", "pipeline_pass", "gc", "inc")


class Strand(str, Enum):
    """Orientation of the hit on the target sequence."""
    PLUS = "+"
    MINUS = "-"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> "Strand":
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"strand must be '+' or '-', got {token!r}") from None


def _parse_int(token: str) -> int:
    # int() alone would also take '1_000' and surrounding whitespace
    if not is_int(token):
        raise ValueError(f"not an integer: {token!r}")
    return int(token)


def _parse_float(token: str) -> float:
    if not is_float(token):
        raise ValueError(f"not a number: {token!r}")
    return float(token)


def _parse_accession(token: str) -> str | None:
    return None if token == NO_ACCESSION else token


_CONVERTERS: dict[str, Callable[[str], object]] = {
    **{c: _parse_int for c in INT_COLS},
    **{c: _parse_float for c in FLOAT_COLS},
    **{c: _parse_accession for c in _ACCESSION_COLS},
    "strand": Strand.parse,
}


@dataclass(frozen=True)
class Record:
    """One hit from a nhmmer or Infernal --tblout table."""
    dialect: Dialect
    target_name: str
    target_accession: str | None
    query_name: str
    query_accession: str | None
    hmm_from: int
    hmm_to: int
    strand: Strand | None
    ali_from: int
    ali_to: int
    env_from: int | None
    env_to: int | None
    sq_len: int | None
    e_value: float
    score: float
    bias: float
    # cmsearch / cmscan only
    mdl: str | None = None
    trunc: str | None = None
    pipeline_pass: int | None = None
    gc: float | None = None
    inc: str | None = None
    description: str | None = None
    tokens: tuple[str, ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def from_tokens(
        cls,
        layout: Layout,
        tokens: Sequence[str],
        description: str | None = None,
        *,
        line_no: int | None = None,
        line: str | None = None,
    ) -> "Record":
        """Build a Record from the fixed tokens of one line, read with layout."""
        values: dict[str, object] = dict.fromkeys(OPTIONAL_COLS)
        for name, token in zip(layout.columns, tokens):
            convert = _CONVERTERS.get(name)
            if convert is None:
                values[name] = token
                continue
            try:
                values[name] = convert(token)
            except ValueError as exc:
                raise FieldParseError(name, token, line_no=line_no, line=line) from exc

        return cls(dialect=layout.dialect, description=description, tokens=tuple(tokens), **values)

    @property
    def has_envelope(self) -> bool:
        return self.env_from is not None and self.env_to is not None

    @property
    def included(self) -> bool | None:
        """Infernal's inclusion mark: True for '!', False for '?', None for nhmmer rows."""
        return None if self.inc is None else self.inc == "!"

    def to_row(self) -> dict[str, object]:
        """Plain dict of the typed columns (strand as its '+'/'-' symbol)."""
        return {
            "dialect": self.dialect.value,
            "target_name": self.target_name,
            "target_accession": self.target_accession,
            "query_name": self.query_name,
            "query_accession": self.query_accession,
            "hmm_from": self.hmm_from,
            "hmm_to": self.hmm_to,
            "strand": None if self.strand is None else self.strand.value,
            "ali_from": self.ali_from,
            "ali_to": self.ali_to,
            "env_from": self.env_from,
            "env_to": self.env_to,
            "sq_len": self.sq_len,
            "e_value": self.e_value,
            "score": self.score,
            "bias": self.bias,
            "mdl": self.mdl,
            "trunc": self.trunc,
            "pipeline_pass": self.pipeline_pass,
            "gc": self.gc,
            "inc": self.inc,
            "description": self.description,
        }


def parse_line(line: str, line_no: int | None = None) -> Record:
    """
    Parse one data line into a Record.

    Raises MalformedLine when no layout fits and FieldParseError when a
    numeric or strand column does not parse.
    """
    raw = line.rstrip("\r\n")
    layout = detect_layout(raw, line_no=line_no)
    tokens, description = split_fixed(raw, layout.width)
    return Record.from_tokens(layout, tokens, description, line_no=line_no, line=raw)
