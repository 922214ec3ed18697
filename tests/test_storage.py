"""
Tests for the SQLAlchemy-backed store, run against a temporary SQLite file.
"""

import pytest

from academy_seed.errors import (
    ClearError,
    ConnectionFailedError,
    IdentityQueryError,
    InsertError,
    LivenessCheckError,
    RowCountError,
)
from academy_seed.models import Course, Exam, Student
from academy_seed.storage import SeedStorage


def _fill(storage):
    storage.insert_students([Student("Иванов Иван Иванович", 2021), Student("Петров Михаил Павлович", 2024)])
    storage.insert_courses([Course("Физика 1", 36)])
    s_ids = storage.student_ids()
    c_ids = storage.course_ids()
    storage.insert_exams([Exam(s_ids[0], c_ids[0], 5)])


class TestSeedStorage:
    """Round trips through a real database file."""

    def test_ping(self, storage):
        storage.ping()

    def test_inserts_assign_identities(self, storage):
        assert storage.insert_students([Student("Смирнов Иван Павлович", 2020)] * 3) == 3
        assert storage.insert_courses([Course("Линал 1", 10), Course("Линал 2", 20)]) == 2

        student_ids = storage.student_ids()
        course_ids = storage.course_ids()

        assert len(student_ids) == 3
        assert len(set(student_ids)) == 3
        assert len(course_ids) == 2
        assert student_ids == sorted(student_ids)

    def test_insert_nothing(self, storage):
        assert storage.insert_students([]) == 0
        assert storage.count_rows("students") == 0

    def test_clear_removes_all_rows(self, storage):
        _fill(storage)
        assert storage.count_rows() == 4

        storage.clear()

        assert storage.count_rows() == 0
        assert storage.student_ids() == []
        assert storage.course_ids() == []

    def test_clear_twice_matches_clear_once(self, storage):
        _fill(storage)

        storage.clear()
        once = (storage.count_rows("exams"), storage.count_rows("students"), storage.count_rows("courses"))
        storage.clear()
        twice = (storage.count_rows("exams"), storage.count_rows("students"), storage.count_rows("courses"))

        assert once == twice == (0, 0, 0)

    def test_duplicate_exam_pair_fails_and_keeps_earlier_rows(self, storage):
        _fill(storage)
        s_id = storage.student_ids()[0]
        c_no = storage.course_ids()[0]

        with pytest.raises(InsertError, match=f"s_id={s_id}, c_no={c_no}"):
            storage.insert_exams([Exam(s_id, c_no, 3)])

        assert storage.count_rows("exams") == 1
        assert storage.count_rows("students") == 2

    def test_context_manager_disposes_engine(self, sqlite_url):
        with SeedStorage.connect(sqlite_url) as store:
            store.create_schema()
            store.ping()


class TestStorageFailures:
    """Each failing operation raises its own error type."""

    def test_unknown_dialect(self):
        with pytest.raises(ConnectionFailedError, match="connect to database"):
            SeedStorage.connect("nosuchdb://user@host/academy")

    def test_malformed_url(self):
        with pytest.raises(ConnectionFailedError):
            SeedStorage.connect("not a database url")

    def test_ping_unreachable(self, tmp_path):
        store = SeedStorage.connect(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'academy.db'}")
        with pytest.raises(LivenessCheckError, match="ping database"):
            store.ping()
        store.close()

    def test_clear_without_schema(self, sqlite_url):
        store = SeedStorage.connect(sqlite_url)
        with pytest.raises(ClearError, match="clear tables"):
            store.clear()
        store.close()

    def test_identity_query_without_schema(self, sqlite_url):
        store = SeedStorage.connect(sqlite_url)
        with pytest.raises(IdentityQueryError, match="students"):
            store.student_ids()
        store.close()

    def test_insert_without_schema_names_the_row(self, sqlite_url):
        store = SeedStorage.connect(sqlite_url)
        with pytest.raises(InsertError, match="course Физика 2"):
            store.insert_courses([Course("Физика 2", 12)])
        store.close()

    def test_row_count_without_schema(self, sqlite_url):
        store = SeedStorage.connect(sqlite_url)
        with pytest.raises(RowCountError, match="count rows"):
            store.count_rows("exams")
        store.close()
