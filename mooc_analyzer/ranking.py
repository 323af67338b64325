"""
Top-K course ranking.

Records are ordered by the chosen metric (descending) with ties broken
by title (ascending), mapped to titles and de-duplicated so each title
keeps its best position.  The metric is a closed enum; unknown metric
names are rejected at the boundary rather than silently mapped to a
default.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Union

from loguru import logger

from .errors import InvalidArgumentError
from .records import RecordStore


class RankMetric(Enum):
    HOURS = "hours"
    PARTICIPANTS = "participants"

    @property
    def column(self) -> str:
        return "total_hours" if self is RankMetric.HOURS else "participants"

    @classmethod
    def parse(cls, value: Union[str, "RankMetric"]) -> "RankMetric":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InvalidArgumentError(
                f"Unknown ranking metric {value!r}; expected one of: {allowed}"
            ) from None


def top_courses(store: RecordStore, k: int, metric: Union[str, RankMetric]) -> List[str]:
    """Return up to ``k`` distinct titles ranked by ``metric``."""
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidArgumentError(f"k must be an integer, got {k!r}")
    if k < 0:
        raise InvalidArgumentError(f"k must be >= 0, got {k}")
    metric = RankMetric.parse(metric)
    if k == 0:
        return []

    df = store.frame
    ranked = df.sort_values([metric.column, "title"], ascending=[False, True], kind="stable")
    titles = ranked["title"].drop_duplicates(keep="first").head(k).tolist()
    logger.debug("Top {} by {}: {} titles", k, metric.value, len(titles))
    return titles
