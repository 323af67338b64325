"""
Grouped participation totals and instructor course lists.

Every function here is a pure pass over a :class:`RecordStore` and
returns freshly built containers.  Ordering rules:

* :func:`participants_by_institution` is keyed in ascending institution
  order.
* :func:`participants_by_institution_and_subject` is ordered by total,
  descending; equal totals keep the order in which their groups first
  appear in the dataset.
* :func:`course_list_by_instructor` is keyed in ascending instructor
  order, each title list sorted and duplicate free.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Set, Tuple

from loguru import logger

from .normalize import institution_subject_key
from .records import RecordStore


class InstructorCourses(NamedTuple):
    """Titles one instructor taught alone and titles shared with others."""

    independent: List[str]
    co_taught: List[str]


def participants_by_institution(store: RecordStore) -> Dict[str, int]:
    df = store.frame
    totals = df.groupby("institution", sort=True)["participants"].sum()
    return {str(k): int(v) for k, v in totals.items()}


def participants_by_institution_and_subject(store: RecordStore) -> Dict[str, int]:
    df = store.frame
    keys = [institution_subject_key(i, s) for i, s in zip(df["institution"], df["subject"])]
    df["group_key"] = keys
    # sort=False keeps groups in first-appearance order; the stable sort keeps it for ties
    totals = df.groupby("group_key", sort=False)["participants"].sum()
    totals = totals.sort_values(ascending=False, kind="stable")
    return {str(k): int(v) for k, v in totals.items()}


def course_list_by_instructor(store: RecordStore) -> Dict[str, InstructorCourses]:
    buckets: Dict[str, Tuple[Set[str], Set[str]]] = {}
    for record in store:
        names = record.instructor_names
        solo = len(names) == 1
        for name in names:
            independent, co_taught = buckets.setdefault(name, (set(), set()))
            (independent if solo else co_taught).add(record.title)

    result = {
        name: InstructorCourses(independent=sorted(independent), co_taught=sorted(co_taught))
        for name, (independent, co_taught) in sorted(buckets.items())
    }
    logger.debug("Grouped courses for {} instructors", len(result))
    return result
