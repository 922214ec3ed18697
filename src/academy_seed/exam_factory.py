"""
ExamFactory: Pair stored students with stored courses and grade them.

Each (student, course) pair appears at most once per batch. The batch stops
at the requested size or when every pair has been used, whichever comes first.
"""

import logging
import random
from typing import List, Optional, Sequence, Set, Tuple

from .models import Exam
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class ExamFactory:
    """Factory for generating exam records from persisted identities."""

    def __init__(self, vocabulary: Optional[Vocabulary], rng: random.Random):
        self.vocabulary = vocabulary or Vocabulary()
        self.rng = rng

    def create_exams(
        self,
        count: int,
        student_ids: Sequence[int],
        course_ids: Sequence[int],
    ) -> List[Exam]:
        """
        Create up to `count` exams with unique (student, course) pairs.

        Args:
            count: Requested number of exams
            student_ids: Identities assigned by the store to students
            course_ids: Identities assigned by the store to courses

        Returns:
            min(count, |students| * |courses|) exams
        """
        if count < 0:
            raise ValueError(f"Exam count must be non-negative, got {count}")

        students = _distinct(student_ids)
        courses = _distinct(course_ids)
        pair_space = len(students) * len(courses)

        if count > pair_space:
            logger.info(
                "Requested %d exams but only %d unique student/course pairs exist",
                count, pair_space,
            )

        used_pairs: Set[Tuple[int, int]] = set()
        exams: List[Exam] = []
        while len(exams) < count and len(used_pairs) < pair_space:
            pair = (self.rng.choice(students), self.rng.choice(courses))
            if pair in used_pairs:
                continue
            used_pairs.add(pair)
            exams.append(Exam(student_id=pair[0], course_id=pair[1], score=self._sample_score()))

        return exams

    def _sample_score(self) -> int:
        low, high = self.vocabulary.score_range
        return self.rng.randint(low, high)


def _distinct(ids: Sequence[int]) -> List[int]:
    """Drop repeated identities, keeping first-seen order."""
    return list(dict.fromkeys(ids))
