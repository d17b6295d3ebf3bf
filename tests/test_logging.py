"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from clubdues.config import TestConfig
from clubdues.logging_config import ROOT_LOGGER, JSONFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="clubdues.services.sync",
        level=kwargs.pop("level", logging.INFO),
        pathname="sync.py",
        lineno=42,
        msg=kwargs.pop("msg", "Sync pass complete"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "sync"
    record.funcName = "run_sync_pass"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "clubdues.services.sync"
    assert log_data["message"] == "Sync pass complete"
    assert log_data["module"] == "sync"
    assert log_data["function"] == "run_sync_pass"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "exception" not in log_data


def test_json_formatter_includes_extra_fields():
    record = _record(created_count=4, promoted_count=1, month="2024-09")
    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"created_count": 4, "promoted_count": 1, "month": "2024-09"}


def test_json_formatter_with_exception():
    """JSONFormatter serializes exception details."""
    try:
        raise RuntimeError("database is locked")
    except RuntimeError:
        exc_info = sys.exc_info()

    log_data = json.loads(
        JSONFormatter().format(_record(level=logging.ERROR, msg="Sync pass failed", exc_info=exc_info))
    )

    assert log_data["exception"]["type"] == "RuntimeError"
    assert "database is locked" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_setup_logging_writes_json_file(tmp_path):
    config = TestConfig(data_dir=tmp_path)
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "clubdues"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    get_logger("scheduler").warning("Ignoring unreadable sync marker", extra={"club_id": 1})
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "clubdues.log"
    assert log_file.exists()
    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines() if line]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "clubdues.scheduler"
    assert entries[-1]["extra"]["club_id"] == 1


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path):
    config = TestConfig(data_dir=tmp_path)

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


@pytest.mark.parametrize("dev_mode", [True, False])
def test_console_level_by_mode(tmp_path, dev_mode):
    config = TestConfig(data_dir=tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console = [
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(console) == 1
    assert console[0].level == (logging.INFO if dev_mode else logging.WARNING)


def test_get_logger_namespaces():
    assert get_logger("services.advance").name == "clubdues.services.advance"
    assert get_logger("clubdues.scheduler").name == "clubdues.scheduler"
    assert get_logger("clubdues").name == "clubdues"
