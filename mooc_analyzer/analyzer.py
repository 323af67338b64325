"""
Query facade bound to one loaded record store.

:class:`CourseAnalyzer` exposes the five analytical queries as methods so
callers (the CLI, the HTTP service, notebooks) hold a single object.  It
keeps no state besides the store, so one instance can serve any number
of concurrent readers.

Example::

    from mooc_analyzer.analyzer import CourseAnalyzer
    analyzer = CourseAnalyzer.from_csv("data/local.csv")
    analyzer.top_courses(10, "hours")
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from .aggregate import (
    InstructorCourses,
    course_list_by_instructor,
    participants_by_institution,
    participants_by_institution_and_subject,
)
from .config import RECOMMEND_LIMIT
from .dataset import load_dataset
from .ranking import RankMetric, top_courses
from .recommend import recommend_courses
from .records import RecordStore
from .search import search_courses


class CourseAnalyzer:
    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @classmethod
    def from_csv(cls, path: Optional[Union[str, Path]] = None) -> "CourseAnalyzer":
        return cls(load_dataset(Path(path) if path is not None else None))

    @property
    def store(self) -> RecordStore:
        return self._store

    def participants_by_institution(self) -> Dict[str, int]:
        return participants_by_institution(self._store)

    def participants_by_institution_and_subject(self) -> Dict[str, int]:
        return participants_by_institution_and_subject(self._store)

    def course_list_by_instructor(self) -> Dict[str, InstructorCourses]:
        return course_list_by_instructor(self._store)

    def top_courses(self, k: int, metric: Union[str, RankMetric]) -> List[str]:
        return top_courses(self._store, k, metric)

    def search_courses(
        self, subject_substring: str, min_percent_audited: float, max_total_hours: float
    ) -> List[str]:
        return search_courses(self._store, subject_substring, min_percent_audited, max_total_hours)

    def recommend_courses(
        self, age: int, gender: int, is_bachelor_or_higher: int, limit: int = RECOMMEND_LIMIT
    ) -> List[str]:
        return recommend_courses(self._store, age, gender, is_bachelor_or_higher, limit=limit)
