"""
🧪 test_logger.py — ініціалізація логера fxconv
"""

import json
import logging

import pytest

from fxconv.shared.utils.logger import (
    LOG_NAME,
    JsonFormatter,
    get_logger,
    init_logging,
    init_logging_from_config,
)


@pytest.fixture(autouse=True)
def _restore_handlers():
    root = logging.getLogger(LOG_NAME)
    saved = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved[0]:
        root.addHandler(handler)
    root.setLevel(saved[1])


def test_repeated_init_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "fx.log"
    init_logging(level="DEBUG", file=str(log_file))
    logger = init_logging(level="DEBUG", file=str(log_file))

    assert len(logger.handlers) == 2
    assert log_file.parent.is_dir()
    assert logging.getLogger("httpx").level == logging.WARNING


def test_config_without_file_only_logs_to_console():
    logger = init_logging_from_config({"level": "INFO", "file": None})
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_console_can_be_disabled(tmp_path):
    logger = init_logging_from_config({"console": False, "file": str(tmp_path / "a.log")})
    assert len(logger.handlers) == 1


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(LOG_NAME, logging.WARNING, __file__, 10, "rates %s", ("USD",), None)
    record.error_code = "network_error"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "rates USD"
    assert payload["level"] == "WARNING"
    assert payload["error_code"] == "network_error"


def test_get_logger_children():
    assert get_logger().name == LOG_NAME
    assert get_logger("cli").name == f"{LOG_NAME}.cli"
