"""
Nearest-neighbour course recommendation over audience profiles.

Each course number (all runs of "the same" course) is summarised by the
mean median age, mean percentage of male participants and mean
percentage of participants holding a bachelor's degree or higher, and
is represented by the title of its most recent run.  A query describes
a single learner: age, gender (0 female, 1 male) and whether they hold
a degree (0/1).  Gender and degree are lifted to the 0-100 percentage
scale and each profile is scored by squared Euclidean distance:

    score = (mean_age - age)^2
          + (mean_percent_male - 100 * gender)^2
          + (mean_percent_degree - 100 * degree)^2

Lower scores are better matches.  Profiles are ranked by score, then by
representative title, and the first ``RECOMMEND_LIMIT`` distinct titles
are returned.  Means are plain float64 arithmetic means and are not
rounded before scoring.

When several runs of a course share the latest launch date the first of
them in dataset order provides the title.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

import numpy as np
import pandas as pd
from loguru import logger

from .config import PERCENT_SCALE, RECOMMEND_LIMIT
from .records import RecordStore

PROFILE_FEATURES = ["mean_age", "mean_percent_male", "mean_percent_degree"]


@dataclass(frozen=True)
class CourseProfile:
    course_number: str
    title: str
    mean_age: float
    mean_percent_male: float
    mean_percent_degree: float
    latest_launch_date: date


def _profile_frame(store: RecordStore) -> pd.DataFrame:
    """One row per course number, in first-appearance order."""
    df = store.frame
    if df.empty:
        return pd.DataFrame(columns=["course_number"] + PROFILE_FEATURES + ["title", "latest_launch_date"])
    grouped = df.groupby("course_number", sort=False)
    means = grouped[["median_age", "percent_male", "percent_degree"]].mean()
    means.columns = PROFILE_FEATURES
    # idxmax returns the first label holding the maximum, i.e. the earliest run in input order
    latest = grouped["launch_date"].idxmax()
    profiles = means.copy()
    profiles["title"] = df.loc[latest.to_numpy(), "title"].to_numpy()
    profiles["latest_launch_date"] = df.loc[latest.to_numpy(), "launch_date"].dt.date.to_numpy()
    profiles.index.name = "course_number"
    return profiles.reset_index()


def build_course_profiles(store: RecordStore) -> List[CourseProfile]:
    profiles = _profile_frame(store)
    return [
        CourseProfile(
            course_number=str(row.course_number),
            title=str(row.title),
            mean_age=float(row.mean_age),
            mean_percent_male=float(row.mean_percent_male),
            mean_percent_degree=float(row.mean_percent_degree),
            latest_launch_date=row.latest_launch_date,
        )
        for row in profiles.itertuples(index=False)
    ]


def query_vector(age: int, gender: int, is_bachelor_or_higher: int) -> np.ndarray:
    return np.array(
        [float(age), gender * PERCENT_SCALE, is_bachelor_or_higher * PERCENT_SCALE],
        dtype="float64",
    )


def score_profiles(profiles: pd.DataFrame, query: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance from every profile row to ``query``."""
    if profiles.empty:
        return np.zeros(0, dtype="float64")
    diffs = profiles[PROFILE_FEATURES].to_numpy(dtype="float64") - query
    return (diffs ** 2).sum(axis=1)


def recommend_courses(
    store: RecordStore,
    age: int,
    gender: int,
    is_bachelor_or_higher: int,
    limit: int = RECOMMEND_LIMIT,
) -> List[str]:
    """Return up to ``limit`` representative titles, best match first."""
    profiles = _profile_frame(store)
    if profiles.empty:
        return []
    profiles["score"] = score_profiles(profiles, query_vector(age, gender, is_bachelor_or_higher))
    ranked = profiles.sort_values(["score", "title"], ascending=[True, True], kind="stable")
    titles = ranked["title"].drop_duplicates(keep="first").head(limit).tolist()
    logger.info(
        "Recommended {} titles from {} course profiles (age={}, gender={}, degree={})",
        len(titles),
        len(profiles),
        age,
        gender,
        is_bachelor_or_higher,
    )
    return titles
