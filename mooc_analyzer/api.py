"""
FastAPI application for the course offerings analyzer.

- Loads the dataset once at startup (``MOOC_DATASET_PATH``) unless an
  analyzer has already been installed with :func:`set_analyzer`
- Read-only endpoints, one per analytical query
- Invalid query arguments map to 422, a missing dataset to 500

Run with::

    uvicorn mooc_analyzer.api:app
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .analyzer import CourseAnalyzer
from .config import (
    DATASET_PATH,
    DEFAULT_TOP_K,
    CountsResponse,
    HealthResponse,
    InstructorCoursesItem,
    InstructorCoursesResponse,
    RecommendRequest,
    SearchRequest,
    TitlesResponse,
)
from .errors import DatasetLoadError, InvalidArgumentError

app = FastAPI(title="MOOC analyzer")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_analyzer: Optional[CourseAnalyzer] = None


def set_analyzer(analyzer: Optional[CourseAnalyzer]) -> None:
    global _analyzer
    _analyzer = analyzer


@app.on_event("startup")
def startup_event() -> None:
    global _analyzer
    if _analyzer is not None:
        logger.info("Analyzer already installed with {} records", len(_analyzer.store))
        return
    logger.info("Starting app warmup...")
    try:
        _analyzer = CourseAnalyzer.from_csv(DATASET_PATH)
        logger.info("Loaded dataset with {} records", len(_analyzer.store))
    except DatasetLoadError as e:
        logger.error("Dataset load failed: {}", e)


def _get_analyzer() -> CourseAnalyzer:
    if _analyzer is None:
        raise HTTPException(status_code=500, detail="Dataset not loaded")
    return _analyzer


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.get("/institutions/participants", response_model=CountsResponse)
def institution_participants() -> CountsResponse:
    return CountsResponse(counts=_get_analyzer().participants_by_institution())


@app.get("/institutions/subjects/participants", response_model=CountsResponse)
def institution_subject_participants() -> CountsResponse:
    return CountsResponse(counts=_get_analyzer().participants_by_institution_and_subject())


@app.get("/instructors/courses", response_model=InstructorCoursesResponse)
def instructor_courses() -> InstructorCoursesResponse:
    lists = _get_analyzer().course_list_by_instructor()
    return InstructorCoursesResponse(
        instructors={
            name: InstructorCoursesItem(independent=c.independent, co_taught=c.co_taught)
            for name, c in lists.items()
        }
    )


@app.get("/courses/top", response_model=TitlesResponse)
def top(k: int = Query(DEFAULT_TOP_K), by: str = Query("participants")) -> TitlesResponse:
    analyzer = _get_analyzer()
    try:
        titles = analyzer.top_courses(k, by)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return TitlesResponse(titles=titles)


@app.post("/courses/search", response_model=TitlesResponse)
def search(req: SearchRequest) -> TitlesResponse:
    titles = _get_analyzer().search_courses(
        req.subject, req.min_percent_audited, req.max_total_hours
    )
    return TitlesResponse(titles=titles)


@app.post("/courses/recommend", response_model=TitlesResponse)
def recommend(req: RecommendRequest) -> TitlesResponse:
    titles = _get_analyzer().recommend_courses(req.age, req.gender, req.is_bachelor_or_higher)
    return TitlesResponse(titles=titles)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mooc_analyzer.api:app", host="0.0.0.0", port=8000, reload=False)
