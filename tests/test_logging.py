"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from habitual.config import BaseConfig
from habitual.logging_config import JSONFormatter, get_logger, setup_logging


def _record(**overrides) -> logging.LogRecord:
    fields = {
        "name": "habitual.test",
        "level": logging.INFO,
        "pathname": "test.py",
        "lineno": 42,
        "msg": "Habit created",
        "args": (),
        "exc_info": None,
    }
    fields.update(overrides)
    record = logging.LogRecord(**fields)
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "habitual.test"
    assert log_data["message"] == "Habit created"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.habit_id = 7

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"habit_id": 7}


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_setup_logging_writes_json_file(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = True

    logger = setup_logging(config)
    get_logger("store").warning("Habit data reset", extra={"habits": 3})

    assert logger.name == "habitual"
    assert len(logger.handlers) == 2

    log_file = tmp_path / "logs" / "habitual.log"
    entries = [json.loads(line) for line in log_file.read_text().splitlines() if line.strip()]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "habitual.store"
    assert entries[-1]["extra"] == {"habits": 3}


def test_setup_logging_is_idempotent(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = tmp_path

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger_namespacing():
    assert get_logger("module1").name == "habitual.module1"
    assert get_logger("habitual.services.seed").name == "habitual.services.seed"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level


def test_file_entries_skip_console_timestamp(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = tmp_path
    config.DEV_MODE = True

    setup_logging(config)
    # The console handler formats first and stamps ``asctime`` on the record.
    get_logger("habits").warning("Completion recorded", extra={"habit_id": 1})

    log_file = tmp_path / "logs" / "habitual.log"
    last = json.loads(log_file.read_text().splitlines()[-1])
    assert last["extra"] == {"habit_id": 1}
