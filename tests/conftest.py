"""Pytest configuration and shared fixtures for Habitual tests.

Stores are created fresh for every test; the SQLModel backend runs on a
temporary SQLite file so both implementations can be exercised by the same
test bodies.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import SQLModel

from habitual import create_app
from habitual.infra.database import create_db_engine, create_session_factory, init_database
from habitual.infra.repositories import InMemoryHabitStore, SQLModelHabitStore

# Thursday; the surrounding Sunday..Saturday week is 2024-03-10..2024-03-16.
TODAY = date(2024, 3, 14)

EVERY_DAY = [0, 1, 2, 3, 4, 5, 6]
WEEKDAYS = [1, 2, 3, 4, 5]


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Keep config, logs and SQLite files inside the test's temp directory."""

    monkeypatch.setenv("HABITUAL_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITUAL_DEV_MODE", "true")
    monkeypatch.delenv("HABITUAL_STORAGE", raising=False)
    monkeypatch.delenv("HABITUAL_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITUAL_SEED_SAMPLE_DATA", raising=False)


@pytest.fixture
def today() -> date:
    return TODAY


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryHabitStore:
    return InMemoryHabitStore()


@pytest.fixture
def sql_store(tmp_path):
    """SQLModel store backed by an isolated SQLite file."""

    from habitual.config import TestConfig

    config = TestConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'habits.db'}"
    engine = create_db_engine(config)
    init_database(engine)

    yield SQLModelHabitStore(create_session_factory(engine))

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(params=["memory", "sqlmodel"])
def store(request):
    """Run the test once per store backend."""

    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(store):
    """Factory for creating habits with sensible defaults."""

    def _create_habit(name: str = "Exercise", frequency_days=None, **overrides):
        payload = {
            "name": name,
            "frequency_days": EVERY_DAY if frequency_days is None else frequency_days,
        }
        payload.update(overrides)
        return store.create_habit(payload)

    return _create_habit


@pytest.fixture
def mark_done(store):
    """Record completions for a habit on each of the given days."""

    def _mark(habit, *days, completed: bool = True):
        for day in days:
            store.upsert_completion(habit.id, day, completed)

    return _mark


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app():
    application = create_app("testing")
    application.config.update(TESTING=True)
    return application


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client
