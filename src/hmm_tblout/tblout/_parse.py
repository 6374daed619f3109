# ------ src/hmm_tblout/tblout/_parse.py -------------

"""
Line classification, whitespace tokenizing and dialect detection for
nhmmer / Infernal --tblout tables.

The description column may itself contain spaces, so a line is never split
blindly: the layout decides how many fixed tokens exist and everything after
them is handed back untouched.
"""

from __future__ import annotations
import re
import logging
from enum import Enum
from typing import NamedTuple

from hmm_tblout.errors import MalformedLine

L = logging.getLogger(__name__)

__all__ = [
    "COMMENT", "LineKind", "Dialect", "Layout",
    "NHMMER_COLS", "NHMMER_STRAND_FIRST_COLS", "INFERNAL_COLS", "INFERNAL_COMPACT_COLS",
    "NHMMER_LAYOUT", "NHMMER_STRAND_FIRST_LAYOUT", "INFERNAL_LAYOUT", "INFERNAL_COMPACT_LAYOUT",
    "LAYOUTS", "MODEL_TYPES", "INCLUSION_MARKS",
    "classify_line", "split_fixed", "detect_layout", "is_int", "is_float",
]

COMMENT = "#"
MODEL_TYPES = frozenset({"cm", "hmm"})   # Infernal 'mdl' column
INCLUSION_MARKS = frozenset({"!", "?"})  # Infernal 'inc' column

_INT_RX = re.compile(r"[+-]?\d+")
_FLOAT_RX = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.I,
)


class LineKind(str, Enum):
    DATA = "data"
    SKIP = "skip"


class Dialect(str, Enum):
    """Which tool wrote the table."""
    NHMMER = "nhmmer"
    INFERNAL = "infernal"


class Layout(NamedTuple):
    dialect: Dialect
    columns: tuple[str, ...]

    @property
    def width(self) -> int:
        return len(self.columns)


# ---- column layouts ------------------------------------------------------
# HMMER's own nhmmer/nhmmscan order; strand sits after sq_len
NHMMER_COLS = tuple(
    "target_name target_accession query_name query_accession "
    "hmm_from hmm_to ali_from ali_to env_from env_to sq_len strand "
    "e_value score bias".split()
)

# same columns with strand straight after the model coordinates
NHMMER_STRAND_FIRST_COLS = tuple(
    "target_name target_accession query_name query_accession "
    "hmm_from hmm_to strand ali_from ali_to env_from env_to sq_len "
    "e_value score bias".split()
)

# cmsearch/cmscan --tblout: mdl from/to -> hmm_from/hmm_to, seq from/to -> ali_from/ali_to.
# No sq_len and no envelope.
INFERNAL_COLS = tuple(
    "target_name target_accession query_name query_accession "
    "mdl hmm_from hmm_to ali_from ali_to strand trunc pipeline_pass gc "
    "bias score e_value inc".split()
)

# strand-first nhmmer columns minus the envelope
INFERNAL_COMPACT_COLS = tuple(c for c in NHMMER_STRAND_FIRST_COLS if c not in ("env_from", "env_to"))

NHMMER_LAYOUT = Layout(Dialect.NHMMER, NHMMER_COLS)
NHMMER_STRAND_FIRST_LAYOUT = Layout(Dialect.NHMMER, NHMMER_STRAND_FIRST_COLS)
INFERNAL_LAYOUT = Layout(Dialect.INFERNAL, INFERNAL_COLS)
INFERNAL_COMPACT_LAYOUT = Layout(Dialect.INFERNAL, INFERNAL_COMPACT_COLS)

LAYOUTS = (INFERNAL_LAYOUT, NHMMER_LAYOUT, NHMMER_STRAND_FIRST_LAYOUT, INFERNAL_COMPACT_LAYOUT)

# enough splits to see every fixed column of the widest layout
_HEAD_SPLITS = max(layout.width for layout in LAYOUTS)


def is_int(token: str) -> bool:
    """True for an optionally signed run of digits ('+' or '-' alone is not an int)."""
    return _INT_RX.fullmatch(token) is not None


def is_float(token: str) -> bool:
    """Decimal or exponent notation, inf and nan. int() / float() alone would also take '1_000'."""
    return _FLOAT_RX.fullmatch(token) is not None


def _strand_slot(token: str) -> bool:
    # '+', '-' or a garbled strand; a number here means a column is missing
    return not is_float(token)


def classify_line(line: str, comment: str = COMMENT) -> LineKind:
    """Blank lines and lines whose first visible char is the comment marker are skipped."""
    stripped = line.lstrip()
    if not stripped or stripped.startswith(comment):
        return LineKind.SKIP
    return LineKind.DATA


def split_fixed(line: str, n: int) -> tuple[list[str], str | None]:
    """
    Split line into its first n whitespace-separated tokens and the raw remainder.

    The remainder is the description column, kept verbatim apart from the
    surrounding whitespace. None when the line stops after the fixed columns.
    """
    parts = line.split(None, n)
    if len(parts) > n:
        return parts[:n], parts[n].strip()
    return parts, None


def detect_layout(line: str, *, line_no: int | None = None) -> Layout:
    """
    Pick the column layout of one data line from its marker columns.

    Infernal lines are recognised by the mdl ('cm'/'hmm') and inc ('!'/'?')
    columns, nhmmer lines by a strand slot next to integer envelope / sq_len
    columns. Alignment coordinates and scores are not looked at, so a bad value
    there still reaches Record and fails as a field error. A line matching no
    layout's markers (wrong column count, shifted columns) is a MalformedLine.
    """
    toks = line.split(None, _HEAD_SPLITS)
    n = len(toks)

    if n >= 17 and toks[4] in MODEL_TYPES and toks[16] in INCLUSION_MARKS:
        layout = INFERNAL_LAYOUT
    elif n >= 15 and _strand_slot(toks[11]) and all(is_int(t) for t in toks[8:11]):
        layout = NHMMER_LAYOUT
    elif n >= 15 and _strand_slot(toks[6]) and all(is_int(t) for t in toks[9:12]):
        layout = NHMMER_STRAND_FIRST_LAYOUT
    elif n >= 13 and _strand_slot(toks[6]) and is_int(toks[9]) and not is_int(toks[10]):
        # sq_len then E-value; an integer E-value means env columns shifted in
        layout = INFERNAL_COMPACT_LAYOUT
    else:
        raise MalformedLine(
            f"{len(line.split())} columns match no nhmmer ({NHMMER_LAYOUT.width}) or Infernal "
            f"({INFERNAL_LAYOUT.width}, compact {INFERNAL_COMPACT_LAYOUT.width}) layout",
            line_no=line_no, line=line.rstrip("\r\n"),
        )

    L.debug("line %s: %s layout (%d fixed columns)", line_no, layout.dialect.value, layout.width)
    return layout
