"""
SeedStorage: Relational store for students, courses and exams.

Thin wrapper over SQLAlchemy Core. Every failure is re-raised as a
StorageError subclass naming the operation and the row involved.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    func,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import (
    ClearError,
    ConnectionFailedError,
    IdentityQueryError,
    InsertError,
    LivenessCheckError,
    RowCountError,
    SchemaError,
)
from .models import Course, Exam, Student

logger = logging.getLogger(__name__)


metadata = MetaData()

students_table = Table(
    "students",
    metadata,
    Column("s_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("start_year", Integer, nullable=False),
)

courses_table = Table(
    "courses",
    metadata,
    Column("c_no", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("hours", Integer, nullable=False),
)

exams_table = Table(
    "exams",
    metadata,
    Column("s_id", Integer, ForeignKey("students.s_id"), primary_key=True, autoincrement=False),
    Column("c_no", Integer, ForeignKey("courses.c_no"), primary_key=True, autoincrement=False),
    Column("score", Integer, nullable=False),
)

# Dependents first
CLEAR_ORDER = (exams_table, students_table, courses_table)


class SeedStorage:
    """
    Storage collaborator for a seeding run.

    Rows are inserted one statement at a time and committed as they go, so a
    failure part way leaves earlier rows in place.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def connect(cls, database_url: str, **engine_kwargs) -> "SeedStorage":
        """Build an engine for `database_url`."""
        try:
            engine = create_engine(database_url, **engine_kwargs)
        except (SQLAlchemyError, ImportError) as e:
            raise ConnectionFailedError(str(e)) from e

        logger.debug("Using database %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    @property
    def display_url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def ping(self) -> None:
        """Open a connection and run a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise LivenessCheckError(f"{self.display_url}: {e}") from e

    def create_schema(self) -> None:
        """Create any of the three tables that do not exist yet."""
        try:
            metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise SchemaError(str(e)) from e
        logger.info("Schema ready on %s", self.display_url)

    def clear(self) -> None:
        """Delete every exam, student and course in one transaction."""
        try:
            with self.engine.begin() as conn:
                for table in CLEAR_ORDER:
                    result = conn.execute(delete(table))
                    logger.debug("Deleted %s rows from %s", result.rowcount, table.name)
        except SQLAlchemyError as e:
            raise ClearError(str(e)) from e

    def insert_students(self, students: Iterable[Student]) -> int:
        inserted = 0
        for student in students:
            try:
                with self.engine.begin() as conn:
                    conn.execute(
                        students_table.insert().values(
                            name=student.name,
                            start_year=student.start_year,
                        )
                    )
            except SQLAlchemyError as e:
                raise InsertError(f"student {student.name}: {e}") from e
            inserted += 1
        return inserted

    def insert_courses(self, courses: Iterable[Course]) -> int:
        inserted = 0
        for course in courses:
            try:
                with self.engine.begin() as conn:
                    conn.execute(
                        courses_table.insert().values(
                            title=course.title,
                            hours=course.hours,
                        )
                    )
            except SQLAlchemyError as e:
                raise InsertError(f"course {course.title}: {e}") from e
            inserted += 1
        return inserted

    def insert_exams(self, exams: Iterable[Exam]) -> int:
        inserted = 0
        for exam in exams:
            try:
                with self.engine.begin() as conn:
                    conn.execute(
                        exams_table.insert().values(
                            s_id=exam.student_id,
                            c_no=exam.course_id,
                            score=exam.score,
                        )
                    )
            except SQLAlchemyError as e:
                raise InsertError(
                    f"exam (s_id={exam.student_id}, c_no={exam.course_id}): {e}"
                ) from e
            inserted += 1
        return inserted

    def student_ids(self) -> List[int]:
        """Identities the store assigned to students."""
        return self._query_ids(students_table.c.s_id, "students")

    def course_ids(self) -> List[int]:
        """Identities the store assigned to courses."""
        return self._query_ids(courses_table.c.c_no, "courses")

    def _query_ids(self, column, label: str) -> List[int]:
        try:
            with self.engine.connect() as conn:
                return list(conn.execute(select(column).order_by(column)).scalars())
        except SQLAlchemyError as e:
            raise IdentityQueryError(f"{label}: {e}") from e

    def count_rows(self, table_name: Optional[str] = None) -> int:
        """Row count for one table, or all three when no name is given."""
        tables = [metadata.tables[table_name]] if table_name else list(CLEAR_ORDER)
        total = 0
        try:
            with self.engine.connect() as conn:
                for table in tables:
                    total += conn.execute(select(func.count()).select_from(table)).scalar_one()
        except SQLAlchemyError as e:
            raise RowCountError(str(e)) from e
        return total

    def close(self) -> None:
        self.engine.dispose()

    def __enter__(self) -> "SeedStorage":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
