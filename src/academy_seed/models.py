"""
Data models for the academy seeding run.

Student and Course carry only their natural attributes; identities are
assigned by the store on insert. Exam links the two by those identities.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Student:
    """A student row before insertion."""
    name: str
    start_year: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Course:
    """A course row before insertion."""
    title: str
    hours: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Exam:
    """An exam result linking a stored student and a stored course."""
    student_id: int
    course_id: int
    score: int

    @property
    def pair(self):
        """The (student_id, course_id) key that must be unique per batch."""
        return (self.student_id, self.course_id)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SeedStats:
    """Summary of one seeding run."""
    students_inserted: int = 0
    courses_inserted: int = 0
    exams_inserted: int = 0
    exams_requested: int = 0

    @property
    def exams_capped(self) -> bool:
        """True when the pair space was smaller than the exam request."""
        return self.exams_inserted < self.exams_requested

    def to_dict(self) -> Dict[str, Any]:
        return {
            "students_inserted": self.students_inserted,
            "courses_inserted": self.courses_inserted,
            "exams_inserted": self.exams_inserted,
            "exams_requested": self.exams_requested,
            "exams_capped": self.exams_capped,
        }
