"""
Command-line runner for the course offerings analyzer.

Loads the dataset once and answers a single query per invocation:

    mooc-analyzer --dataset data/local.csv top --k 10 --by hours
    mooc-analyzer recommend --age 25 --gender 1 --degree 1
    mooc-analyzer --json instructors --name "Eric Lander"

Plain output prints one title per line, or ``key<TAB>value`` for the
participation totals; ``--json`` prints the raw result instead.
``serve`` starts the HTTP service with uvicorn.

Exit codes: 0 success, 1 dataset could not be loaded, 2 invalid
arguments.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from loguru import logger

from .aggregate import InstructorCourses
from .analyzer import CourseAnalyzer
from .config import DATASET_PATH, DEFAULT_TOP_K, LOG_DIR, LOG_LEVEL, configure_logging
from .errors import DatasetLoadError, InvalidArgumentError


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mooc-analyzer", description="Analyze online course offerings")
    ap.add_argument("--dataset", type=Path, default=DATASET_PATH, help="CSV dataset path")
    ap.add_argument("--log-level", default=LOG_LEVEL, help="loguru level (default from MOOC_LOG_LEVEL)")
    ap.add_argument("--log-file", action="store_true", help=f"also log to {LOG_DIR / 'mooc_analyzer.log'}")
    ap.add_argument("--json", action="store_true", help="print results as JSON")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("institutions", help="participants per institution")
    sub.add_parser("subjects", help="participants per institution-subject")

    p = sub.add_parser("instructors", help="courses per instructor")
    p.add_argument("--name", default=None, help="only this instructor")

    p = sub.add_parser("top", help="top-K courses")
    p.add_argument("--k", type=int, default=DEFAULT_TOP_K)
    p.add_argument("--by", default="participants", help="hours | participants")

    p = sub.add_parser("search", help="filter courses")
    p.add_argument("--subject", default="")
    p.add_argument("--min-audited", type=float, default=0.0)
    p.add_argument("--max-hours", type=float, required=True)

    p = sub.add_parser("recommend", help="recommend courses for a learner")
    p.add_argument("--age", type=int, required=True)
    p.add_argument("--gender", type=int, choices=[0, 1], required=True, help="0 female, 1 male")
    p.add_argument("--degree", type=int, choices=[0, 1], required=True, help="1 bachelor or higher")

    p = sub.add_parser("serve", help="run the HTTP service")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    return ap


def _print_titles(titles: List[str], as_json: bool) -> None:
    if as_json:
        print(json.dumps(titles, ensure_ascii=False))
        return
    for t in titles:
        print(t)


def _print_counts(counts: Dict[str, int], as_json: bool) -> None:
    if as_json:
        print(json.dumps(counts, ensure_ascii=False))
        return
    for key, value in counts.items():
        print(f"{key}\t{value}")


def _print_instructors(lists: Dict[str, InstructorCourses], as_json: bool) -> None:
    if as_json:
        payload = {name: c._asdict() for name, c in lists.items()}
        print(json.dumps(payload, ensure_ascii=False))
        return
    for name, c in lists.items():
        print(name)
        print(f"  independent: {'; '.join(c.independent)}")
        print(f"  co-taught:   {'; '.join(c.co_taught)}")


def _serve(args: argparse.Namespace, analyzer: CourseAnalyzer) -> None:
    import uvicorn

    from . import api

    api.set_analyzer(analyzer)
    uvicorn.run(api.app, host=args.host, port=args.port, reload=False)


def run_command(args: argparse.Namespace, analyzer: CourseAnalyzer) -> None:
    if args.command == "institutions":
        _print_counts(analyzer.participants_by_institution(), args.json)
    elif args.command == "subjects":
        _print_counts(analyzer.participants_by_institution_and_subject(), args.json)
    elif args.command == "instructors":
        lists = analyzer.course_list_by_instructor()
        if args.name is not None:
            lists = {args.name: lists[args.name]} if args.name in lists else {}
        _print_instructors(lists, args.json)
    elif args.command == "top":
        _print_titles(analyzer.top_courses(args.k, args.by), args.json)
    elif args.command == "search":
        _print_titles(analyzer.search_courses(args.subject, args.min_audited, args.max_hours), args.json)
    elif args.command == "recommend":
        _print_titles(analyzer.recommend_courses(args.age, args.gender, args.degree), args.json)
    elif args.command == "serve":
        _serve(args, analyzer)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, LOG_DIR / "mooc_analyzer.log" if args.log_file else None)

    try:
        analyzer = CourseAnalyzer.from_csv(args.dataset)
    except DatasetLoadError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    logger.info("Loaded {} records from {}", len(analyzer.store), args.dataset)

    try:
        run_command(args, analyzer)
    except InvalidArgumentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
