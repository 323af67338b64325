"""
Configuration for the online course offerings analyzer.

Paths, dataset schema, query constants and the Pydantic schemas used by
the HTTP service all live here so the rest of the package never
hardcodes them.  Values that differ between machines can be overridden
through ``MOOC_*`` environment variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = PROJECT_ROOT / "data"
DATASET_PATH = Path(os.getenv("MOOC_DATASET_PATH", str(DATA_DIR / "local.csv")))
LOG_DIR = PROJECT_ROOT / "logs"

# Logging
LOG_LEVEL = os.getenv("MOOC_LOG_LEVEL", "INFO")
LOG_ROTATION = "10 MB"

# Dataset schema, in file order.  The header row is discarded and these
# names are assigned by position.
DATASET_COLUMNS: List[str] = [
    "institution",
    "course_number",
    "launch_date",
    "title",
    "instructors",
    "subject",
    "year",
    "honor_code",
    "participants",
    "audited",
    "certified",
    "percent_audited",
    "percent_certified",
    "percent_certified_50",
    "percent_video",
    "percent_forum",
    "grade_higher_zero",
    "total_hours",
    "median_hours_certification",
    "median_age",
    "percent_male",
    "percent_female",
    "percent_degree",
]
TEXT_COLUMNS: List[str] = ["institution", "course_number", "title", "instructors", "subject"]
INT_COLUMNS: List[str] = ["year", "honor_code", "participants", "audited", "certified"]
COUNT_COLUMNS: List[str] = ["participants", "audited", "certified"]
FLOAT_COLUMNS: List[str] = DATASET_COLUMNS[11:]
DATE_COLUMN = "launch_date"
LAUNCH_DATE_FORMAT = os.getenv("MOOC_LAUNCH_DATE_FORMAT", "%m/%d/%Y")

# Text cleanup
QUOTE_CHAR = '"'
INSTRUCTOR_SEPARATOR = ","
INSTITUTION_SUBJECT_SEPARATOR = "-"

# Query policy
DEFAULT_TOP_K = 10
RECOMMEND_LIMIT = 10
PERCENT_SCALE = 100.0


def configure_logging(level: str = LOG_LEVEL, log_file: Optional[Path] = None) -> None:
    """Route loguru output to stderr and, optionally, a rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level.upper(), rotation=LOG_ROTATION)


# Pydantic schemas
class HealthResponse(BaseModel):
    status: str


class CountsResponse(BaseModel):
    counts: Dict[str, int]


class InstructorCoursesItem(BaseModel):
    independent: List[str]
    co_taught: List[str]


class InstructorCoursesResponse(BaseModel):
    instructors: Dict[str, InstructorCoursesItem]


class TitlesResponse(BaseModel):
    titles: List[str]


class SearchRequest(BaseModel):
    subject: str = ""
    min_percent_audited: float = 0.0
    max_total_hours: float


class RecommendRequest(BaseModel):
    age: int = Field(..., ge=0)
    gender: int = Field(..., ge=0, le=1)
    is_bachelor_or_higher: int = Field(..., ge=0, le=1)
