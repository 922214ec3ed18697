"""
Academy seeding package.

Clears the students, courses and exams tables and refills them with random,
internally consistent sample rows.
"""

from .models import (
    Student,
    Course,
    Exam,
    SeedStats,
)
from .errors import (
    SeedError,
    StorageError,
    ConnectionFailedError,
    LivenessCheckError,
    ClearError,
    SchemaError,
    InsertError,
    IdentityQueryError,
    RowCountError,
    ConfigError,
    ExportError,
)
from .vocabulary import Vocabulary, VocabularyError
from .student_factory import StudentFactory
from .course_factory import CourseFactory, TitleSpaceExhaustedError
from .exam_factory import ExamFactory
from .storage import SeedStorage
from .config import SeedConfig
from .pipeline import SeedPipeline, run_seed, main

__all__ = [
    # Models
    "Student",
    "Course",
    "Exam",
    "SeedStats",
    # Errors
    "SeedError",
    "StorageError",
    "ConnectionFailedError",
    "LivenessCheckError",
    "ClearError",
    "SchemaError",
    "InsertError",
    "IdentityQueryError",
    "RowCountError",
    "ExportError",
    "VocabularyError",
    "TitleSpaceExhaustedError",
    "ConfigError",
    # Generation
    "Vocabulary",
    "StudentFactory",
    "CourseFactory",
    "ExamFactory",
    # Storage and pipeline
    "SeedStorage",
    "SeedConfig",
    "SeedPipeline",
    "run_seed",
    "main",
]
