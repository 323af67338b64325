import csv
from datetime import date

import pytest

from mooc_analyzer.records import CourseRecord, RecordStore

HEADER = [
    "Institution", "Course Number", "Launch Date", "Course Title", "Instructors",
    "Course Subject", "Year", "Honor Code Certificates", "Participants (Course Content Accessed)",
    "Audited (> 50% Course Content Accessed)", "Certified", "% Audited", "% Certified",
    "% Certified of > 50% Course Content Accessed", "% Played Video", "% Posted in Forum",
    "% Grade Higher Than Zero", "Total Course Hours (Thousands)", "Median Hours for Certification",
    "Median Age", "% Male", "% Female", "% Bachelor's Degree or Higher",
]

RAW_ROW_DEFAULTS = {
    "institution": "MITx",
    "course_number": "6.002x",
    "launch_date": "09/05/2012",
    "title": "Circuits and Electronics",
    "instructors": "Khurram Afridi",
    "subject": "Science, Technology, Engineering, and Mathematics",
    "year": "1",
    "honor_code": "1",
    "participants": "36105",
    "audited": "5431",
    "certified": "3003",
    "percent_audited": "15.04",
    "percent_certified": "8.32",
    "percent_certified_50": "54.98",
    "percent_video": "83.2",
    "percent_forum": "8.17",
    "grade_higher_zero": "28.97",
    "total_hours": "418.94",
    "median_hours_certification": "64.45",
    "median_age": "26",
    "percent_male": "88.28",
    "percent_female": "11.72",
    "percent_degree": "60.68",
}

RECORD_DEFAULTS = {
    "institution": "MITx",
    "course_number": "6.002x",
    "launch_date": date(2012, 9, 5),
    "title": "Circuits and Electronics",
    "instructors": "Khurram Afridi",
    "subject": "STEM",
    "year": 1,
    "honor_code": 1,
    "participants": 100,
    "audited": 10,
    "certified": 5,
    "percent_audited": 10.0,
    "percent_certified": 5.0,
    "percent_certified_50": 50.0,
    "percent_video": 80.0,
    "percent_forum": 8.0,
    "grade_higher_zero": 30.0,
    "total_hours": 10.0,
    "median_hours_certification": 60.0,
    "median_age": 26.0,
    "percent_male": 80.0,
    "percent_female": 20.0,
    "percent_degree": 60.0,
}


def raw_row(**overrides):
    """One dataset row as a list of strings, in file order."""
    values = {**RAW_ROW_DEFAULTS, **overrides}
    return list(values.values())


@pytest.fixture
def make_record():
    def _make(**overrides):
        return CourseRecord(**{**RECORD_DEFAULTS, **overrides})

    return _make


@pytest.fixture
def make_store(make_record):
    def _make(*overrides_list):
        return RecordStore.from_records(make_record(**o) for o in overrides_list)

    return _make


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, header=HEADER, name="courses.csv"):
        path = tmp_path / name
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write
