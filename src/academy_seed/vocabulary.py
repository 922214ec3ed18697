"""
Vocabulary: word lists and numeric ranges used to build sample rows.

Defaults match the academy dataset; any of them can be overridden from a
YAML file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from .errors import SeedError


SURNAMES = ["Иванов", "Петров", "Александров", "Кузнецов", "Смирнов"]

GIVEN_NAMES = ["Иван", "Александр", "Михаил", "Елена", "Алексей"]

PATRONYMICS = ["Иванович", "Сергеевна", "Павлович", "Александрович", "Дмитриевич"]

COURSE_SUBJECTS = ["Матан", "Программирование", "Физика", "Базы данных", "Линал"]

COURSE_SUFFIXES = ["1", "2", "3", "4"]

# Inclusive bounds
START_YEAR_RANGE = (2020, 2025)
HOURS_RANGE = (1, 100)
SCORE_RANGE = (2, 5)


class VocabularyError(SeedError, ValueError):
    """Raised when a vocabulary is empty or has an inverted range."""
    pass


@dataclass
class Vocabulary:
    """
    Fixed vocabularies for sample generation.

    Word lists are sampled uniformly with replacement. Ranges are inclusive
    (low, high) integer pairs.
    """
    surnames: List[str] = field(default_factory=lambda: list(SURNAMES))
    given_names: List[str] = field(default_factory=lambda: list(GIVEN_NAMES))
    patronymics: List[str] = field(default_factory=lambda: list(PATRONYMICS))
    course_subjects: List[str] = field(default_factory=lambda: list(COURSE_SUBJECTS))
    course_suffixes: List[str] = field(default_factory=lambda: list(COURSE_SUFFIXES))
    start_year_range: Tuple[int, int] = START_YEAR_RANGE
    hours_range: Tuple[int, int] = HOURS_RANGE
    score_range: Tuple[int, int] = SCORE_RANGE

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check that every list has words and every range is ordered."""
        for name in ("surnames", "given_names", "patronymics",
                     "course_subjects", "course_suffixes"):
            if not getattr(self, name):
                raise VocabularyError(f"Vocabulary list '{name}' is empty")

        for name in ("start_year_range", "hours_range", "score_range"):
            low, high = getattr(self, name)
            if low > high:
                raise VocabularyError(
                    f"Vocabulary range '{name}' is inverted: [{low}, {high}]"
                )

    @staticmethod
    def format_title(subject: str, suffix: str) -> str:
        return f"{subject} {suffix}"

    def title_space(self) -> int:
        """Number of distinct course titles this vocabulary can produce."""
        return len({
            self.format_title(subject, suffix)
            for subject in self.course_subjects
            for suffix in self.course_suffixes
        })

    @classmethod
    def from_yaml(cls, path: Path) -> "Vocabulary":
        """Load a vocabulary from YAML; missing keys keep their defaults."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise VocabularyError(f"Cannot read vocabulary file {path}: {e}") from e

        if not isinstance(data, dict):
            raise VocabularyError(f"Vocabulary file {path} must contain a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vocabulary":
        """Build a vocabulary from a plain mapping."""
        kwargs: Dict[str, Any] = {}

        # Parse word lists
        for name in ("surnames", "given_names", "patronymics",
                     "course_subjects", "course_suffixes"):
            if name in data:
                kwargs[name] = _parse_words(name, data[name])

        # Parse ranges
        for name in ("start_year_range", "hours_range", "score_range"):
            if name in data:
                kwargs[name] = _parse_range(name, data[name])

        return cls(**kwargs)


def _parse_range(name: str, value: Any) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise VocabularyError(f"Vocabulary range '{name}' must be a [low, high] pair")
    low, high = value
    # bool is an int subclass
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (low, high)):
        raise VocabularyError(f"Vocabulary range '{name}' must hold integers")
    return low, high


def _parse_words(name: str, value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise VocabularyError(f"Vocabulary list '{name}' must be a list of words")
    return [str(word) for word in value]
