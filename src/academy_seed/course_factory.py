"""
CourseFactory: Generate courses with titles unique within a batch.
"""

import logging
import random
from typing import List, Optional, Set

from .errors import SeedError
from .models import Course
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class TitleSpaceExhaustedError(SeedError, ValueError):
    """Raised when more unique courses are requested than titles exist."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot generate {requested} courses with unique titles: "
            f"vocabulary only yields {available} distinct titles"
        )


class CourseFactory:
    """
    Factory for generating course records.

    Titles are drawn by rejection sampling: a candidate already used in
    the current batch is discarded and redrawn.
    """

    def __init__(self, vocabulary: Optional[Vocabulary], rng: random.Random):
        self.vocabulary = vocabulary or Vocabulary()
        self.rng = rng

    def create_courses(self, count: int) -> List[Course]:
        """
        Create `count` courses with pairwise-distinct titles.

        Raises:
            TitleSpaceExhaustedError: if `count` exceeds the number of
                distinct titles the vocabulary can form
        """
        if count < 0:
            raise ValueError(f"Course count must be non-negative, got {count}")

        available = self.vocabulary.title_space()
        if count > available:
            raise TitleSpaceExhaustedError(count, available)

        used_titles: Set[str] = set()
        courses: List[Course] = []
        for _ in range(count):
            title = self._draw_unused_title(used_titles)
            used_titles.add(title)
            courses.append(Course(title=title, hours=self._sample_hours()))

        logger.debug("Generated %d course titles out of %d available", count, available)
        return courses

    def _draw_unused_title(self, used_titles: Set[str]) -> str:
        while True:
            title = self.vocabulary.format_title(
                self.rng.choice(self.vocabulary.course_subjects),
                self.rng.choice(self.vocabulary.course_suffixes),
            )
            if title not in used_titles:
                return title

    def _sample_hours(self) -> int:
        low, high = self.vocabulary.hours_range
        return self.rng.randint(low, high)
