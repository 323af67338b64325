"""Predicate search over course runs."""

from __future__ import annotations

from typing import List

from loguru import logger

from .records import RecordStore


def search_courses(
    store: RecordStore,
    subject_substring: str,
    min_percent_audited: float,
    max_total_hours: float,
) -> List[str]:
    """
    Titles of runs matching all three predicates, sorted and duplicate free.

    - ``subject`` contains ``subject_substring`` (case-insensitive; empty matches all)
    - ``percent_audited >= min_percent_audited``
    - ``total_hours <= max_total_hours``
    """
    df = store.frame
    subject_hit = df["subject"].str.contains(subject_substring or "", case=False, regex=False)
    mask = (
        subject_hit.astype(bool)
        & (df["percent_audited"] >= min_percent_audited)
        & (df["total_hours"] <= max_total_hours)
    )
    titles = sorted(set(df.loc[mask, "title"]))
    logger.debug("Search {!r} matched {} titles", subject_substring, len(titles))
    return titles
