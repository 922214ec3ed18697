"""
Pipeline: Wire the factories and the store together for one seeding run.

clear -> students -> courses -> (fetch identities) -> exams
"""

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .config import SeedConfig
from .course_factory import CourseFactory
from .errors import ExportError, SeedError
from .exam_factory import ExamFactory
from .models import Course, Exam, SeedStats, Student
from .storage import SeedStorage
from .student_factory import StudentFactory
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class SeedPipeline:
    """Main pipeline for seeding the academy tables."""

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            vocabulary: Word lists and ranges (defaults when None)
            random_seed: Seed for reproducibility; None draws from OS entropy
            rng: Explicit random source, takes precedence over random_seed
        """
        self.vocabulary = vocabulary or Vocabulary()
        self.seed = random_seed
        self.rng = rng or random.Random(random_seed)

        self.student_factory = StudentFactory(self.vocabulary, self.rng)
        self.course_factory = CourseFactory(self.vocabulary, self.rng)
        self.exam_factory = ExamFactory(self.vocabulary, self.rng)

    def run(
        self,
        storage: SeedStorage,
        students: int,
        courses: int,
        exams: int,
    ) -> SeedStats:
        """Clear the store and refill it. Stops at the first storage error."""
        stats = SeedStats(exams_requested=exams)

        storage.clear()
        logger.info("Cleared exams, students and courses")

        student_batch = self.student_factory.create_students(students)
        stats.students_inserted = storage.insert_students(student_batch)
        logger.info("Inserted %d students", stats.students_inserted)

        course_batch = self.course_factory.create_courses(courses)
        stats.courses_inserted = storage.insert_courses(course_batch)
        logger.info("Inserted %d courses", stats.courses_inserted)

        exam_batch = self.exam_factory.create_exams(
            exams,
            storage.student_ids(),
            storage.course_ids(),
        )
        stats.exams_inserted = storage.insert_exams(exam_batch)
        logger.info("Inserted %d exams", stats.exams_inserted)

        return stats

    def generate_offline(
        self,
        students: int,
        courses: int,
        exams: int,
    ) -> Tuple[List[Student], List[Course], List[Exam]]:
        """
        Generate a full batch without a store.

        Identities are numbered from 1 in insertion order, the way an empty
        auto-increment table would assign them.
        """
        student_batch = self.student_factory.create_students(students)
        course_batch = self.course_factory.create_courses(courses)
        exam_batch = self.exam_factory.create_exams(
            exams,
            list(range(1, len(student_batch) + 1)),
            list(range(1, len(course_batch) + 1)),
        )
        return student_batch, course_batch, exam_batch

    def export_csv(
        self,
        output_dir: Path,
        students: Sequence[Student],
        courses: Sequence[Course],
        exams: Sequence[Exam],
    ) -> None:
        """Write an offline batch to students.csv, courses.csv and exams.csv."""
        output_dir = Path(output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(f"Cannot create export directory {output_dir}: {e}") from e

        student_df = pd.DataFrame(
            [{"s_id": i, **s.to_dict()} for i, s in enumerate(students, start=1)],
            columns=["s_id", "name", "start_year"],
        )
        _write_csv(student_df, output_dir / "students.csv")
        logger.info("Wrote %d records to %s", len(student_df), output_dir / "students.csv")

        course_df = pd.DataFrame(
            [{"c_no": i, **c.to_dict()} for i, c in enumerate(courses, start=1)],
            columns=["c_no", "title", "hours"],
        )
        _write_csv(course_df, output_dir / "courses.csv")
        logger.info("Wrote %d records to %s", len(course_df), output_dir / "courses.csv")

        exam_df = pd.DataFrame(
            [{"s_id": e.student_id, "c_no": e.course_id, "score": e.score} for e in exams],
            columns=["s_id", "c_no", "score"],
        )
        _write_csv(exam_df, output_dir / "exams.csv")
        logger.info("Wrote %d records to %s", len(exam_df), output_dir / "exams.csv")


def _write_csv(df: pd.DataFrame, path: Path) -> None:
    try:
        df.to_csv(path, index=False)
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e


def run_seed(config: SeedConfig) -> SeedStats:
    """Convenience function to run a full seeding pass from a config."""
    config.validate()
    vocabulary = (
        Vocabulary.from_yaml(config.vocabulary_path)
        if config.vocabulary_path
        else Vocabulary()
    )
    pipeline = SeedPipeline(vocabulary=vocabulary, random_seed=config.random_seed)

    if config.dry_run:
        students, courses, exams = pipeline.generate_offline(
            config.students, config.courses, config.exams,
        )
        if config.export_dir:
            pipeline.export_csv(config.export_dir, students, courses, exams)
        return SeedStats(
            students_inserted=len(students),
            courses_inserted=len(courses),
            exams_inserted=len(exams),
            exams_requested=config.exams,
        )

    storage = SeedStorage.connect(config.database_url)
    try:
        storage.ping()
        if config.create_schema:
            storage.create_schema()
        return pipeline.run(storage, config.students, config.courses, config.exams)
    finally:
        storage.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="academy-seed",
        description="Reset the academy tables and fill them with random sample data",
    )
    parser.add_argument(
        "--database-url", "-d",
        default=None,
        help="SQLAlchemy database URL (default: $DATABASE_URL)",
    )
    parser.add_argument("--students", type=int, default=None, help="Number of students")
    parser.add_argument("--courses", type=int, default=None, help="Number of courses")
    parser.add_argument("--exams", type=int, default=None, help="Number of exams requested")
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--vocabulary",
        type=Path,
        default=None,
        help="YAML file overriding names, course titles and ranges",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate data without touching the database",
    )
    parser.add_argument(
        "--export-dir", "-o",
        type=Path,
        default=None,
        help="With --dry-run, write the generated rows as CSV files here",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def config_from_args(args: argparse.Namespace, base: SeedConfig) -> SeedConfig:
    """Overlay parsed flags on an environment-derived config."""
    if args.database_url is not None:
        base.database_url = args.database_url
    if args.students is not None:
        base.students = args.students
    if args.courses is not None:
        base.courses = args.courses
    if args.exams is not None:
        base.exams = args.exams
    if args.seed is not None:
        base.random_seed = args.seed
    if args.vocabulary is not None:
        base.vocabulary_path = args.vocabulary
    base.create_schema = base.create_schema or args.create_schema
    base.dry_run = base.dry_run or args.dry_run
    if args.export_dir is not None:
        base.export_dir = args.export_dir
    return base


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.export_dir is not None and not args.dry_run:
        parser.error("--export-dir requires --dry-run")

    try:
        config = config_from_args(args, SeedConfig.from_env())
        stats = run_seed(config)
    except SeedError as e:
        logger.error("%s", e)
        return 1

    verb = "Generated" if config.dry_run else "Inserted"
    print("\n=== Seeding Complete ===")
    print(f"{verb} students: {stats.students_inserted}")
    print(f"{verb} courses: {stats.courses_inserted}")
    print(f"{verb} exams: {stats.exams_inserted} (requested {stats.exams_requested})")
    if stats.exams_capped:
        print("  Exam count limited by available student/course pairs")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
