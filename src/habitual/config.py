"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("memory", "sqlmodel")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Habitual"
    DB_FILENAME = "habitual.db"
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITUAL_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("HABITUAL_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.STORAGE_BACKEND = os.getenv("HABITUAL_STORAGE", "memory").strip().lower()
        self.DATABASE_URL = os.getenv("HABITUAL_DATABASE_URL", self._build_sqlite_url())
        self.SEED_SAMPLE_DATA = _env_bool("HABITUAL_SEED_SAMPLE_DATA", default=False)
        if self.STORAGE_BACKEND not in STORAGE_BACKENDS:
            raise ValueError(
                f"HABITUAL_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}; "
                f"got {self.STORAGE_BACKEND!r}."
            )
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITUAL_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and SQLite files live."""

        data_root = os.getenv("HABITUAL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; never seeds sample data."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.SEED_SAMPLE_DATA = False
