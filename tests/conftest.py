"""
Shared fixtures for the seeding tests.
"""

import pytest

from academy_seed.storage import SeedStorage

ENV_KEYS = (
    "DATABASE_URL",
    "SEED_STUDENTS",
    "SEED_COURSES",
    "SEED_EXAMS",
    "SEED_RANDOM_SEED",
    "SEED_VOCABULARY",
)


class ScriptedRng:
    """Random stand-in that replays scripted choices and returns range lows."""

    def __init__(self, choices):
        self.choices = list(choices)

    def choice(self, seq):
        value = self.choices.pop(0)
        assert value in seq
        return value

    def randint(self, low, high):
        return low


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any .env file."""
    for key in ENV_KEYS:
        # setenv first so the later delete is recorded and undone
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'academy.db'}"


@pytest.fixture
def storage(sqlite_url):
    store = SeedStorage.connect(sqlite_url)
    store.create_schema()
    yield store
    store.close()


@pytest.fixture
def scripted_rng():
    return ScriptedRng
