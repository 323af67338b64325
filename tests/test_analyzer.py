from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import raw_row
from mooc_analyzer import CourseAnalyzer, CourseRecord, InvalidArgumentError
from mooc_analyzer.records import RecordStore


@pytest.fixture
def analyzer(make_store):
    return CourseAnalyzer(make_store(
        {"institution": "X", "subject": "CS", "participants": 100, "title": "B", "total_hours": 10.0},
        {"institution": "X", "subject": "CS", "participants": 200, "title": "A", "total_hours": 10.0},
    ))


class TestCourseAnalyzer:
    """Test the query facade."""

    def test_end_to_end_examples(self, analyzer):
        assert analyzer.participants_by_institution()["X"] == 300
        assert analyzer.top_courses(2, "hours") == ["A", "B"]

    def test_every_query_is_idempotent(self, analyzer):
        calls = [
            analyzer.participants_by_institution,
            analyzer.participants_by_institution_and_subject,
            analyzer.course_list_by_instructor,
            lambda: analyzer.top_courses(5, "participants"),
            lambda: analyzer.search_courses("cs", 0.0, 100.0),
            lambda: analyzer.recommend_courses(30, 0, 1),
        ]
        for call in calls:
            assert call() == call()

    def test_queries_do_not_mutate_store(self, analyzer):
        before = analyzer.store.records
        frame_before = analyzer.store.frame
        analyzer.participants_by_institution_and_subject()
        analyzer.recommend_courses(30, 1, 1)
        assert analyzer.store.records == before
        assert list(analyzer.store.frame.columns) == list(frame_before.columns)

    def test_invalid_metric(self, analyzer):
        with pytest.raises(InvalidArgumentError):
            analyzer.top_courses(1, "rating")

    def test_concurrent_queries_match_sequential(self, make_store):
        """Test that queries from many threads see the same results as one thread."""
        analyzer = CourseAnalyzer(make_store(
            {"institution": "X", "subject": "CS", "participants": 100, "title": "B", "instructors": "P, Q"},
            {"institution": "Y", "subject": "Math", "participants": 300, "title": "A", "instructors": "P"},
            {"institution": "X", "subject": "Math", "participants": 50, "title": "C", "median_age": 31.0},
        ))
        calls = {
            "institutions": analyzer.participants_by_institution,
            "subjects": analyzer.participants_by_institution_and_subject,
            "instructors": analyzer.course_list_by_instructor,
            "top": lambda: analyzer.top_courses(3, "participants"),
            "search": lambda: analyzer.search_courses("math", 0.0, 1000.0),
            "recommend": lambda: analyzer.recommend_courses(30, 0, 1),
        }
        expected = {name: call() for name, call in calls.items()}

        jobs = [name for name in calls for _ in range(25)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda name: (name, calls[name]()), jobs))

        assert len(results) == len(jobs)
        for name, result in results:
            assert result == expected[name]

    def test_from_csv(self, write_csv):

        analyzer = CourseAnalyzer.from_csv(write_csv([raw_row()]))
        assert len(analyzer.store) == 1


class TestCourseRecord:
    """Test the record model."""

    def test_immutable(self, make_record):
        record = make_record()
        with pytest.raises(AttributeError):
            record.title = "Changed"

    def test_quote_artifacts_stripped_once(self, make_record):
        record = make_record(title='""Double""', instructors='"A, B"', subject='"Math')
        assert isinstance(record, CourseRecord)
        assert record.title == '"Double"'
        assert record.instructors == "A, B"
        assert record.subject == "Math"


class TestRecordStore:
    """Test building the record store."""

    def test_from_records_keeps_order(self, make_record):
        store = RecordStore.from_records(iter([make_record(title="B"), make_record(title="A")]))
        assert [r.title for r in store] == ["B", "A"]

    def test_from_records_rejects_non_records(self, make_record):
        with pytest.raises(TypeError, match="Item 1 is dict"):
            RecordStore.from_records([make_record(), {"title": "A"}])
