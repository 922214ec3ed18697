"""
StudentFactory: Generate student rows with random full names.
"""

import random
from typing import List, Optional

from .models import Student
from .vocabulary import Vocabulary


class StudentFactory:
    """Factory for generating student records."""

    def __init__(self, vocabulary: Optional[Vocabulary], rng: random.Random):
        self.vocabulary = vocabulary or Vocabulary()
        self.rng = rng

    def create_students(self, count: int) -> List[Student]:
        """Create `count` students. Duplicate full names are allowed."""
        if count < 0:
            raise ValueError(f"Student count must be non-negative, got {count}")
        return [self.create_student() for _ in range(count)]

    def create_student(self) -> Student:
        return Student(name=self._generate_name(), start_year=self._sample_start_year())

    def _generate_name(self) -> str:
        """Surname, given name and patronymic, drawn independently."""
        surname = self.rng.choice(self.vocabulary.surnames)
        given = self.rng.choice(self.vocabulary.given_names)
        patronymic = self.rng.choice(self.vocabulary.patronymics)
        return f"{surname} {given} {patronymic}"

    def _sample_start_year(self) -> int:
        low, high = self.vocabulary.start_year_range
        return self.rng.randint(low, high)
