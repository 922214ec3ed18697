"""
Tests for course generation and unique-title rejection sampling.
"""

import random

import pytest

from academy_seed.course_factory import CourseFactory, TitleSpaceExhaustedError
from academy_seed.errors import SeedError
from academy_seed.vocabulary import Vocabulary


@pytest.mark.parametrize("count", [0, 1, 5, 20])
def test_titles_unique_and_hours_in_range(count):
    vocab = Vocabulary()
    courses = CourseFactory(vocab, random.Random(count)).create_courses(count)

    assert len(courses) == count
    assert len({c.title for c in courses}) == count
    low, high = vocab.hours_range
    assert all(low <= c.hours <= high for c in courses)


def test_full_title_space_is_reachable():
    vocab = Vocabulary(course_subjects=["Физика", "Линал"], course_suffixes=["1", "2"])
    courses = CourseFactory(vocab, random.Random(5)).create_courses(4)

    assert sorted(c.title for c in courses) == ["Линал 1", "Линал 2", "Физика 1", "Физика 2"]


def test_used_title_is_redrawn(scripted_rng):
    vocab = Vocabulary(course_subjects=["Матан", "Физика"], course_suffixes=["1"])
    rng = scripted_rng([
        "Матан", "1",
        "Матан", "1",  # duplicate, rejected
        "Физика", "1",
    ])

    courses = CourseFactory(vocab, rng).create_courses(2)

    assert [c.title for c in courses] == ["Матан 1", "Физика 1"]
    assert rng.choices == []


def test_request_beyond_title_space_fails_fast():
    vocab = Vocabulary(course_subjects=["Физика"], course_suffixes=["1", "2"])
    factory = CourseFactory(vocab, random.Random(0))

    with pytest.raises(TitleSpaceExhaustedError) as excinfo:
        factory.create_courses(3)

    assert excinfo.value.requested == 3
    assert excinfo.value.available == 2
    assert isinstance(excinfo.value, SeedError)


def test_negative_count_is_rejected():
    with pytest.raises(ValueError):
        CourseFactory(None, random.Random(0)).create_courses(-2)
