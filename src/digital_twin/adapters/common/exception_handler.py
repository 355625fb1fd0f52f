"""Turn exceptions into the error payload shared by the API and the CLI.

A ``DigitalTwinError`` describes itself through ``to_dict``. Anything else
(a bug, or a library error that escaped an adapter) is described from the
innermost traceback frame under the ``PYTHON_ERR`` code, so clients always
get the same payload shape.
"""

import json
import logging
import traceback
from typing import Any

from ...core.domain.exceptions import (
    DigitalTwinError,
    KnowledgeBaseError,
    LLMConnectionError,
    LLMRateLimitError,
    RaiseSite,
    RetrievalError,
    ValidationError,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_CODE = "PYTHON_ERR"

# Checked in order, so subclasses must precede their bases
HTTP_STATUS_BY_ERROR: tuple[tuple[type[Exception] | tuple[type[Exception], ...], int], ...] = (
    (ValidationError, 400),
    (LLMRateLimitError, 429),
    ((KnowledgeBaseError, RetrievalError, LLMConnectionError), 503),
    (DigitalTwinError, 500),
    (ValueError, 400),
    ((ConnectionError, TimeoutError), 503),
)


def _describe_unexpected(exc: Exception, include_trace: bool) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": UNEXPECTED_ERROR_CODE,
            "message": str(exc),
        },
        "location": RaiseSite.from_traceback(exc.__traceback__).to_dict(),
    }
    if include_trace:
        text = "".join(traceback.format_exception(exc))
        payload["stack_trace"] = [line for line in text.splitlines() if line.strip()]
    return payload


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the error payload for ``exc``.

    Args:
        exc: Any exception.
        include_trace: Add ``stack_trace`` (debug mode only).
        extra_context: Merged into ``context``, e.g. the request path.
    """
    if isinstance(exc, DigitalTwinError):
        payload = exc.to_dict(include_trace=include_trace)
    else:
        payload = _describe_unexpected(exc, include_trace)

    if extra_context:
        payload["context"] = {**payload.get("context", {}), **extra_context}
    return payload


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log the full payload of ``exc``, trace included, as indented JSON."""
    payload = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    (log or logger).log(level, json.dumps(payload, indent=2, default=str))


def get_http_status_code(exc: Exception) -> int:
    """Status code for an exception that reached the API boundary."""
    for error_types, status in HTTP_STATUS_BY_ERROR:
        if isinstance(exc, error_types):
            return status
    return 500
