"""
Top-level package for the online course offerings analyzer.

The package loads a tabular dataset of course runs (one row per
offering) into an immutable record store and answers a fixed set of
queries over it: participation totals per institution and per
institution/subject, instructor course lists, top-K rankings, filtered
search and a demographic nearest-neighbour recommender.  A FastAPI
service and an argparse CLI sit on top.  There are no side effects on
import.
"""

from .analyzer import CourseAnalyzer
from .errors import DatasetLoadError, InvalidArgumentError
from .ranking import RankMetric
from .records import CourseRecord, RecordStore

__all__ = [
    "CourseAnalyzer",
    "CourseRecord",
    "DatasetLoadError",
    "InvalidArgumentError",
    "RankMetric",
    "RecordStore",
]
