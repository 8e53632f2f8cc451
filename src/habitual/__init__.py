"""Habitual application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .domain.repositories.habit import HabitStore
from .errors import HabitualError
from .extensions import get_store, init_store
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "habitual.blueprints.habits"
    yield "habitual.blueprints.stats"
    yield "habitual.blueprints.settings"


def create_app(config_name: str | None = None, *, store: HabitStore | None = None) -> Flask:
    """Create and configure the Flask application instance.

    Args:
        config_name: ``development``, ``testing`` or ``None`` for the base config
        store: habit store to use instead of building one from configuration
    """

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITUAL_CONFIG"] = config_obj
    app.json.sort_keys = False

    setup_logging(config_obj)
    _register_blueprints(app)
    _register_error_handlers(app)
    init_store(app, store)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    """Render every failure as a JSON ``{"message": ...}`` body."""

    logger = get_logger("errors")

    @app.errorhandler(HabitualError)
    def _handle_habitual_error(exc: HabitualError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error while serving request")
        return jsonify({"message": "Internal server error"}), 500


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app", "get_store"]
