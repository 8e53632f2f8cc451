"""Habit store wiring for the Flask application."""

from __future__ import annotations

import atexit

from flask import Flask, current_app

from .config import BaseConfig
from .domain.repositories.habit import HabitStore
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import InMemoryHabitStore, SQLModelHabitStore
from .logging_config import get_logger

STORE_KEY = "habitual.store"
ENGINE_KEY = "habitual.engine"

logger = get_logger(__name__)


def build_store(app: Flask, config: BaseConfig) -> HabitStore:
    """Construct the store selected by ``config.STORAGE_BACKEND``."""

    if config.STORAGE_BACKEND == "sqlmodel":
        engine = create_db_engine(config)
        init_database(engine)
        app.extensions[ENGINE_KEY] = engine
        atexit.register(engine.dispose)
        return SQLModelHabitStore(create_session_factory(engine))
    return InMemoryHabitStore()


def init_store(app: Flask, store: HabitStore | None = None) -> HabitStore:
    """Attach a habit store to the app, building one from config if needed."""

    config: BaseConfig = app.config["HABITUAL_CONFIG"]
    if store is None:
        store = build_store(app, config)
        if config.SEED_SAMPLE_DATA and not store.list_habits():
            from .services.seed import seed_sample_data

            seed_sample_data(store)

    app.extensions[STORE_KEY] = store
    logger.info("Habit store ready", extra={"store": type(store).__name__})
    return store


def get_store(app: Flask | None = None) -> HabitStore:
    """Return the store attached to ``app`` (defaults to the current app)."""

    app = app or current_app
    try:
        return app.extensions[STORE_KEY]
    except KeyError:  # pragma: no cover - create_app always attaches one
        raise RuntimeError("Habit store not initialized") from None


def dispose_store(app: Flask) -> None:
    """Release resources held by the app's store backend."""

    app.extensions.pop(STORE_KEY, None)
    engine = app.extensions.pop(ENGINE_KEY, None)
    if engine is not None:
        atexit.unregister(engine.dispose)
        engine.dispose()
