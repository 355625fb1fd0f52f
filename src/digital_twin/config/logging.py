"""Logging setup for the API server and the CLI.

Everything the package logs goes through the ``digital_twin`` logger, so a
single call to ``setup_logging`` decides where records end up. Console
output goes to stderr because the CLI writes answers to stdout. Hosted
deployments switch to one JSON object per line with ``LOG_JSON=true``.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "digital_twin"

# Record attributes passed through ``extra=`` that are copied into JSON output
CONTEXT_FIELDS = ("session_id", "document_count", "path")

# HTTP client libraries log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


class JSONExceptionFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Keys: ``timestamp``, ``level``, ``logger``, ``message`` and ``location``,
    plus ``context`` for any of ``CONTEXT_FIELDS`` set on the record and
    ``exception`` when the record carries exc_info.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.filename,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        context = {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JSONExceptionFormatter()
    return logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """(Re)configure the ``digital_twin`` logger.

    Safe to call more than once: previous handlers are closed and replaced,
    which is what happens when the CLI callback runs before ``serve`` starts
    the API app.

    Args:
        level: Level name, case-insensitive. Unknown names fall back to INFO.
        log_file: Also append records to this file, creating its directory.
        json_format: Emit JSON lines instead of the human-readable layout.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = _build_formatter(json_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
