"""Configuration, store selection and CLI wiring."""

from __future__ import annotations

import pytest

from habitual import create_app
from habitual.config import BaseConfig
from habitual.extensions import ENGINE_KEY, dispose_store, get_store
from habitual.infra.repositories import InMemoryHabitStore, SQLModelHabitStore


def test_defaults_to_memory_store(app):
    assert isinstance(get_store(app), InMemoryHabitStore)
    assert get_store(app).list_habits() == []
    assert ENGINE_KEY not in app.extensions


def test_sqlmodel_backend_persists_across_apps(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HABITUAL_STORAGE", "sqlmodel")
    monkeypatch.setenv("HABITUAL_DATABASE_URL", f"sqlite:///{tmp_path / 'habits.db'}")

    first = create_app("testing")
    assert isinstance(get_store(first), SQLModelHabitStore)
    with first.test_client() as client:
        response = client.post("/api/habits", json={"name": "Journal", "frequencyDays": [1, 3]})
        assert response.status_code == 201

    dispose_store(first)
    assert ENGINE_KEY not in first.extensions

    second = create_app("testing")
    with second.test_client() as client:
        [habit] = client.get("/api/habits").get_json()
    assert habit["name"] == "Journal"
    assert habit["frequencyDays"] == [1, 3]
    dispose_store(second)


def test_seed_flag_populates_store(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HABITUAL_SEED_SAMPLE_DATA", "true")

    app = create_app("development")

    assert len(get_store(app).list_habits()) == 5


def test_testing_config_never_seeds(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HABITUAL_SEED_SAMPLE_DATA", "true")

    app = create_app("testing")

    assert get_store(app).list_habits() == []


def test_unknown_storage_backend_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HABITUAL_STORAGE", "redis")

    with pytest.raises(ValueError, match="HABITUAL_STORAGE"):
        BaseConfig()


def test_secret_required_outside_dev_mode(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HABITUAL_DEV_MODE", "false")
    monkeypatch.delenv("HABITUAL_SECRET_KEY", raising=False)

    with pytest.raises(ValueError, match="HABITUAL_SECRET_KEY"):
        BaseConfig()


class TestCli:
    def test_seed_command(self, app):
        result = app.test_cli_runner().invoke(args=["habitual-seed"])

        assert result.exit_code == 0
        assert "Seeded 5 sample habits." in result.output
        assert len(get_store(app).list_habits()) == 5

    def test_seed_command_skips_populated_store(self, app):
        get_store(app).create_habit({"name": "Existing", "frequency_days": [1]})

        result = app.test_cli_runner().invoke(args=["habitual-seed"])

        assert "already exist" in result.output
        assert len(get_store(app).list_habits()) == 1

    def test_reset_command(self, app):
        get_store(app).create_habit({"name": "Existing", "frequency_days": [1]})

        result = app.test_cli_runner().invoke(args=["habitual-reset", "--yes"])

        assert result.exit_code == 0
        assert get_store(app).list_habits() == []
