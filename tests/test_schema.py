# ------- tests/test_schema.py -------------

import logging
from pathlib import Path

import pandas as pd
import pandera as pa
import pytest

from hmm_tblout.errors import FieldParseError, MalformedLine
from hmm_tblout.tblout.frame import parse_tblout, records_to_frame
from hmm_tblout.tblout.record import parse_line
from hmm_tblout.tblout.schema import FRAME_COLS, validate

DATA = Path(__file__).resolve().parent / "data"


def test_nhmmer_frame_columns_and_types():
    df = parse_tblout(DATA / "nhmmer.tbl")
    assert list(df.columns) == FRAME_COLS
    assert len(df) == 3
    assert df["ali_from"].tolist() == [10, 410, 1630]
    assert df["env_to"].dtype == "Int64"
    assert df["strand"].tolist() == ["+", "-", "+"]
    assert set(df["dialect"]) == {"nhmmer"}


def test_infernal_frame_has_null_envelope():
    df = parse_tblout(DATA / "infernal.tbl")
    assert len(df) == 4
    assert df["env_from"].isna().all()
    assert df["env_to"].isna().all()
    assert df["sq_len"].isna().all()
    assert df["mdl"].tolist() == ["cm", "cm", "cm", "hmm"]
    assert df["inc"].tolist() == ["!", "!", "?", "?"]
    assert df["pipeline_pass"].tolist() == [1, 1, 3, 4]
    assert df["gc"].tolist() == pytest.approx([0.52, 0.58, 0.47, 0.41])
    assert df["description"].tolist()[0] == "Ailuropoda melanoleuca"
    assert df["description"].tolist()[3] == "-"


def test_nhmmer_frame_has_null_infernal_columns():
    df = parse_tblout(DATA / "nhmmer.tbl")
    for col in ("mdl", "trunc", "pipeline_pass", "gc", "inc"):
        assert df[col].isna().all()
    assert df["pipeline_pass"].dtype == "Int64"


def test_schema_rejects_gc_out_of_range():
    df = records_to_frame([parse_line(
        "AAGJ04000034.1 - tRNA RF00005 cm 1 72 156640 156710 + no 1 0.52 0.0 57.7 2.2e-11 !"
    )])
    df.loc[0, "gc"] = 1.5
    with pytest.raises(pa.errors.SchemaErrors):
        validate(df)


def test_raise_policy_stops_on_first_bad_line():
    with pytest.raises(MalformedLine):
        parse_tblout(DATA / "mixed_errors.tbl")


def test_skip_policy_logs_and_continues(caplog):
    with caplog.at_level(logging.WARNING):
        df = parse_tblout(DATA / "mixed_errors.tbl", errors="skip")
    assert df["target_name"].tolist() == ["seqA", "seqD"]
    assert "skipping" in caplog.text


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        parse_tblout(DATA / "nhmmer.tbl", errors="ignore")


def test_empty_table(tmp_path):
    p = tmp_path / "empty.tbl"
    p.write_text("# nothing found\n")
    df = parse_tblout(p)
    assert df.empty
    assert list(df.columns) == FRAME_COLS


def test_mixed_dialects_share_one_frame():
    recs = [
        parse_line("seqA - m - 1 100 + 10 110 5 115 500 1e-5 5.0 0.1"),
        parse_line("seqB - m - 1 100 - 10 110 500 1e-5 5.0 0.1 infernal hit"),
    ]
    df = validate(records_to_frame(recs))
    assert df["env_from"].tolist()[0] == 5
    assert pd.isna(df["env_from"].tolist()[1])


def test_schema_rejects_bad_strand():
    df = records_to_frame([parse_line("seqA - m - 1 100 + 10 110 5 115 500 1e-5 5.0 0.1")])
    df.loc[0, "strand"] = "?"
    with pytest.raises(pa.errors.SchemaErrors):
        validate(df)


def test_field_error_propagates_from_raise_policy(tmp_path):
    p = tmp_path / "bad.tbl"
    p.write_text("seqA - m - 1 100 + 10 x 5 115 500 1e-5 5.0 0.1\n")
    with pytest.raises(FieldParseError) as info:
        parse_tblout(p)
    assert info.value.field == "ali_to"
