# ------ src/hmm_tblout/tblout/frame.py -------------

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Literal

import pandas as pd
from tqdm import tqdm

from hmm_tblout.errors import TbloutError
from hmm_tblout.tblout.reader import Reader
from hmm_tblout.tblout.record import Record
from hmm_tblout.tblout.schema import FRAME_COLS, FRAME_DTYPES, validate

L = logging.getLogger(__name__)
__all__ = ["records_to_frame", "parse_tblout"]


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Stack Records into a typed DataFrame with FRAME_COLS in order."""
    rows = [rec.to_row() for rec in records]
    df = pd.DataFrame(rows, columns=FRAME_COLS)
    return df.astype(FRAME_DTYPES)


def parse_tblout(
    tsv: str | Path,
    *,
    errors: Literal["raise", "skip"] = "raise",
    config: dict | None = None,
    progress: bool = False,
) -> pd.DataFrame:
    """
    Read a nhmmer / Infernal tblout file into a validated DataFrame.

    errors="raise" stops at the first bad data line, errors="skip" logs it and
    moves on. Source failures always raise TbloutIOError.
    """
    if errors not in ("raise", "skip"):
        raise ValueError(f"errors must be 'raise' or 'skip', not {errors!r}")

    records: list[Record] = []
    skipped = 0
    with Reader.from_path(tsv, config=config) as rdr:
        for item in tqdm(rdr.records(), desc=Path(tsv).name, unit="hit",
                         leave=False, disable=not progress):
            if isinstance(item, TbloutError):
                if errors == "raise":
                    raise item
                skipped += 1
                L.warning("[tblout] skipping %s: %s", Path(tsv).name, item)
                continue
            records.append(item)

    L.info("Parsed %d hits from %s (%d lines skipped)", len(records), Path(tsv).name, skipped)
    return validate(records_to_frame(records))
