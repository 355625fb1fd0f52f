"""Unit tests for logging setup."""

import json
import logging
import sys

import pytest

from digital_twin.config.logging import JSONExceptionFormatter, setup_logging

pytestmark = pytest.mark.unit


def make_record(exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="digital_twin.test",
        level=logging.ERROR,
        pathname=__file__,
        lineno=10,
        msg="failed for %s",
        args=("session-1",),
        exc_info=exc_info,
    )


def test_json_formatter_outputs_one_object():
    entry = json.loads(JSONExceptionFormatter().format(make_record()))

    assert entry["level"] == "ERROR"
    assert entry["logger"] == "digital_twin.test"
    assert entry["message"] == "failed for session-1"
    assert entry["location"]["line"] == 10
    assert "exception" not in entry


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record(sys.exc_info())

    entry = json.loads(JSONExceptionFormatter().format(record))

    assert entry["exception"]["type"] == "RuntimeError"
    assert entry["exception"]["message"] == "boom"
    assert "Traceback" in entry["exception"]["traceback"]


def test_setup_logging_is_idempotent(temp_dir):
    log_file = temp_dir / "logs" / "app.log"

    setup_logging(level="debug", log_file=log_file)
    logger = setup_logging(level="debug", log_file=log_file, json_format=True)

    assert logger.name == "digital_twin"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert isinstance(logger.handlers[0].formatter, JSONExceptionFormatter)
    assert log_file.parent.exists()

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_json_formatter_copies_session_context():
    record = make_record()
    record.session_id = "session-1"
    record.unrelated = "dropped"

    entry = json.loads(JSONExceptionFormatter().format(record))

    assert entry["context"] == {"session_id": "session-1"}


def test_console_output_goes_to_stderr():
    logger = setup_logging()

    assert logger.handlers[0].stream is sys.stderr
    assert logging.getLogger("httpx").level == logging.WARNING

    logger.handlers.clear()


def test_unknown_level_falls_back_to_info():
    logger = setup_logging(level="chatty")

    assert logger.level == logging.INFO

    logger.handlers.clear()
