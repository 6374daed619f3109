# --------- src/hmm_tblout/tblout/schema.py ----------------

from __future__ import annotations
import pandera as pa # dataframe validation library
import pandas as pd # write pd.DataFrame in type hints
from hmm_tblout.tblout._parse import INCLUSION_MARKS, MODEL_TYPES, Dialect

FRAME_COLS = (
    "dialect target_name target_accession query_name query_accession "
    "hmm_from hmm_to strand ali_from ali_to env_from env_to sq_len "
    "e_value score bias mdl trunc pipeline_pass gc inc description"
).split()

# dtypes records_to_frame casts to before validation
FRAME_DTYPES = {
    "hmm_from": "int64", "hmm_to": "int64",
    "ali_from": "int64", "ali_to": "int64",
    "env_from": "Int64", "env_to": "Int64", # absent for Infernal rows
    "sq_len": "Int64",                      # absent for cmsearch/cmscan rows
    "e_value": "float64", "score": "float64", "bias": "float64",
    "pipeline_pass": "Int64", "gc": "float64", # cmsearch/cmscan only
}

schema = pa.DataFrameSchema(
    {
     "dialect":          pa.Column(str, pa.Check.isin([d.value for d in Dialect])),
     "target_name":      pa.Column(str),
     "target_accession": pa.Column(str, nullable=True),
     "query_name":       pa.Column(str),
     "query_accession":  pa.Column(str, nullable=True),
     "hmm_from":         pa.Column(int),
     "hmm_to":           pa.Column(int),
     "strand":           pa.Column(str, pa.Check.isin(["+", "-"]), nullable=True),
     "ali_from":         pa.Column(int),
     "ali_to":           pa.Column(int),
     "env_from":         pa.Column("Int64", nullable=True),
     "env_to":           pa.Column("Int64", nullable=True),
     "sq_len":           pa.Column("Int64", nullable=True),
     "e_value":          pa.Column(float),
     "score":            pa.Column(float),
     "bias":             pa.Column(float),
     "mdl":              pa.Column(str, pa.Check.isin(sorted(MODEL_TYPES)), nullable=True),
     "trunc":            pa.Column(str, nullable=True),
     "pipeline_pass":    pa.Column("Int64", nullable=True),
     "gc":               pa.Column(float, pa.Check.in_range(0.0, 1.0), nullable=True),
     "inc":              pa.Column(str, pa.Check.isin(sorted(INCLUSION_MARKS)), nullable=True),
     "description":      pa.Column(str, nullable=True),
    },
    strict=True,
    ordered=True,
)

def validate(df: pd.DataFrame) -> pd.DataFrame:
    """Raise SchemaErrors if columns or dtypes deviate; otherwise return df unchanged."""
    return schema.validate(df, lazy=True)
