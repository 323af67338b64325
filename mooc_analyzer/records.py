"""
Record model and the immutable record store every query reads from.

A :class:`CourseRecord` is one course run (one dataset row).  The
:class:`RecordStore` keeps the records in input order and owns a
column-oriented pandas view of them that the query modules use for
grouping and sorting.  Nothing in the package writes to either after
construction: accessors hand out tuples and frame copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Iterator, List, Tuple

import pandas as pd

from .config import DATASET_COLUMNS, DATE_COLUMN, FLOAT_COLUMNS, INT_COLUMNS
from .normalize import split_instructors, strip_quote_artifacts

_CLEANED_TEXT_FIELDS = ("title", "instructors", "subject")


@dataclass(frozen=True)
class CourseRecord:
    institution: str
    course_number: str
    launch_date: date
    title: str
    instructors: str
    subject: str
    year: int
    honor_code: int
    participants: int
    audited: int
    certified: int
    percent_audited: float
    percent_certified: float
    percent_certified_50: float
    percent_video: float
    percent_forum: float
    grade_higher_zero: float
    total_hours: float
    median_hours_certification: float
    median_age: float
    percent_male: float
    percent_female: float
    percent_degree: float

    def __post_init__(self) -> None:
        for name in _CLEANED_TEXT_FIELDS:
            object.__setattr__(self, name, strip_quote_artifacts(getattr(self, name)))

    @property
    def instructor_names(self) -> List[str]:
        return split_instructors(self.instructors)


def _records_to_frame(records: Tuple[CourseRecord, ...]) -> pd.DataFrame:
    rows = [tuple(getattr(r, col) for col in DATASET_COLUMNS) for r in records]
    df = pd.DataFrame(rows, columns=DATASET_COLUMNS)
    dtypes: Dict[str, str] = {col: "int64" for col in INT_COLUMNS}
    dtypes.update({col: "float64" for col in FLOAT_COLUMNS})
    df = df.astype(dtypes)
    df[DATE_COLUMN] = pd.to_datetime(df[DATE_COLUMN])
    return df.reset_index(drop=True)


class RecordStore:
    """Ordered, read-only collection of course records."""

    def __init__(self, records: Iterable[CourseRecord]) -> None:
        self._records: Tuple[CourseRecord, ...] = tuple(records)
        self._frame = _records_to_frame(self._records)

    @classmethod
    def from_records(cls, records: Iterable[CourseRecord]) -> "RecordStore":
        """Build a store from caller-supplied records, rejecting anything that is not a record."""
        checked: List[CourseRecord] = []
        for i, record in enumerate(records):
            if not isinstance(record, CourseRecord):
                raise TypeError(f"Item {i} is {type(record).__name__}, not CourseRecord")
            checked.append(record)
        return cls(checked)

    @property
    def records(self) -> Tuple[CourseRecord, ...]:
        return self._records

    @property
    def frame(self) -> pd.DataFrame:
        """A private copy of the tabular view; one row per record, input order, RangeIndex."""
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CourseRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> CourseRecord:
        return self._records[index]

    def __repr__(self) -> str:
        return f"RecordStore({len(self._records)} records)"
