"""
Ingestion of the course offerings dataset into a :class:`RecordStore`.

The file is comma delimited, may quote fields that contain commas and
starts with a header row.  The header is discarded: the 23 columns are
positional and renamed to the canonical schema in
:data:`~mooc_analyzer.config.DATASET_COLUMNS`.  Every cell is then
validated and typed.  A load either produces a complete store or raises
:class:`~mooc_analyzer.errors.DatasetLoadError` naming the offending
data row; there is no partially loaded state.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
from loguru import logger

from .config import (
    COUNT_COLUMNS,
    DATASET_COLUMNS,
    DATASET_PATH,
    DATE_COLUMN,
    FLOAT_COLUMNS,
    INT_COLUMNS,
    LAUNCH_DATE_FORMAT,
    TEXT_COLUMNS,
)
from .errors import DatasetLoadError
from .records import CourseRecord, RecordStore

_INT_PATTERN = r"[+-]?[0-9]+"
_INT64 = np.iinfo("int64")
_PARSER_LINE_RE = re.compile(r"line (\d+)")


# ---------------------------
# Column standardisation
# ---------------------------

def _standardise_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename the raw header positionally to the canonical schema."""
    if len(df.columns) != len(DATASET_COLUMNS):
        raise DatasetLoadError(
            f"Expected {len(DATASET_COLUMNS)} columns, found {len(df.columns)}: {list(df.columns)}"
        )
    col_map = dict(zip(df.columns, DATASET_COLUMNS))
    logger.debug("Standardising columns with map: {}", col_map)
    return df.set_axis(DATASET_COLUMNS, axis=1)


# ---------------------------
# Cell validation
# ---------------------------

def _fail_first(mask: pd.Series, raw: pd.Series, column: str, reason: str) -> None:
    """Raise for the first row flagged in ``mask``, if any."""
    if not mask.any():
        return
    pos = int(mask.to_numpy().argmax())
    raise DatasetLoadError(f"{reason}: {raw.iloc[pos]!r}", row=pos + 1, column=column)


def _parse_int_column(raw: pd.Series, column: str) -> pd.Series:
    text = raw.str.strip()
    _fail_first(~text.str.fullmatch(_INT_PATTERN), raw, column, "Malformed integer")
    ints = [int(v) for v in text]
    out_of_range = pd.Series([not (_INT64.min <= v <= _INT64.max) for v in ints], index=raw.index, dtype=bool)
    _fail_first(out_of_range, raw, column, "Integer out of range")
    values = pd.Series(ints, index=raw.index, dtype="int64")
    if column in COUNT_COLUMNS:
        _fail_first(values < 0, raw, column, "Negative count")
    return values


def _parse_float_column(raw: pd.Series, column: str) -> pd.Series:
    values = pd.to_numeric(raw.str.strip(), errors="coerce")
    _fail_first(values.isna(), raw, column, "Malformed number")
    return values.astype("float64")


def _parse_date_column(raw: pd.Series, column: str) -> pd.Series:
    values = pd.to_datetime(raw.str.strip(), format=LAUNCH_DATE_FORMAT, errors="coerce")
    _fail_first(values.isna(), raw, column, "Malformed date")
    return values.dt.date


def parse_frame(df_raw: pd.DataFrame) -> pd.DataFrame:
    """
    Validate and type a frame of raw string cells.

    Input: one column per canonical field, string cells, input order.
    Output: the same frame with integer, float and ``date`` columns
    converted.  Text cells are passed through untouched; quote
    artifacts are removed later by :class:`CourseRecord` itself.
    """
    df = df_raw.reset_index(drop=True)
    for column in DATASET_COLUMNS:
        _fail_first(df[column].isna(), df[column], column, "Missing field")

    typed = pd.DataFrame(index=df.index)
    for column in DATASET_COLUMNS:
        raw = df[column].astype(str)
        if column in TEXT_COLUMNS:
            typed[column] = raw
        elif column == DATE_COLUMN:
            typed[column] = _parse_date_column(raw, column)
        elif column in INT_COLUMNS:
            typed[column] = _parse_int_column(raw, column)
        elif column in FLOAT_COLUMNS:
            typed[column] = _parse_float_column(raw, column)
    return typed


def records_from_frame(df_raw: pd.DataFrame) -> RecordStore:
    """Turn a frame of raw string cells (canonical column names) into a store."""
    typed = parse_frame(df_raw)
    records = [CourseRecord(**row) for row in typed.to_dict("records")]
    logger.info("Built record store with {} records", len(records))
    return RecordStore(records)


# ---------------------------
# Entry points
# ---------------------------

def load_rows(rows: Iterable[Sequence[str]]) -> RecordStore:
    """
    Build a store from already-split rows (header excluded).

    Each row must carry exactly one value per schema column.
    """
    materialised: List[Sequence[str]] = []
    for i, row in enumerate(rows, start=1):
        if len(row) != len(DATASET_COLUMNS):
            raise DatasetLoadError(
                f"Expected {len(DATASET_COLUMNS)} fields, found {len(row)}", row=i
            )
        materialised.append(row)
    df_raw = pd.DataFrame(materialised, columns=DATASET_COLUMNS, dtype=str)
    return records_from_frame(df_raw)


def _parser_error_row(error: Exception) -> Optional[int]:
    """
    Data row named in a pandas tokenizer message ("... in line 3, saw 24").

    The file line counts the header, so data row = line - 1.  Quoted
    fields spanning several lines shift this; ``None`` when no line is
    given.
    """
    match = _PARSER_LINE_RE.search(str(error))
    if match is None:
        return None
    return max(int(match.group(1)) - 1, 1)


def read_raw_dataset(path: Path) -> pd.DataFrame:
    """Read the delimited file into a frame of string cells with canonical names."""
    if not path.exists():
        raise DatasetLoadError(f"Dataset file not found: {path}")
    logger.info("Loading raw dataset from {}", path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    except pd.errors.EmptyDataError as e:
        raise DatasetLoadError(f"Dataset {path} has no header row") from e
    except pd.errors.ParserError as e:
        raise DatasetLoadError(f"Malformed row in {path}: {e}", row=_parser_error_row(e)) from e
    except UnicodeDecodeError as e:
        raise DatasetLoadError(f"Dataset {path} is not valid UTF-8: {e}") from e
    logger.info("Read {} raw rows from {}", len(df), path)
    return _standardise_columns(df)


def load_dataset(path: Optional[Path] = None) -> RecordStore:
    """End-to-end: read the file at ``path`` (default :data:`DATASET_PATH`) and build the store."""
    path = Path(path) if path is not None else DATASET_PATH
    df_raw = read_raw_dataset(path)
    return records_from_frame(df_raw)
