"""Root of the digital twin error hierarchy.

Errors travel outward through the hexagon: the JSON repository raises
``KnowledgeBaseError``, ``IndexRetriever`` wraps it in ``RetrievalError``,
and the API turns whatever reaches it into an HTTP status plus the payload
from ``to_dict``. Each error keeps the place it was raised (``RaiseSite``)
and the exception it wraps, so the payload still points at the real
failure after several layers of wrapping.
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import PurePath
from types import FrameType
from typing import Any


def _file_name(path: str) -> str:
    return PurePath(path.replace("\\", "/")).name


@dataclass(frozen=True)
class RaiseSite:
    """Where an error was raised and when."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def unknown(cls) -> "RaiseSite":
        return cls("<unknown>", "<unknown>", "<unknown>", 0)

    @classmethod
    def from_frame(cls, frame: FrameType) -> "RaiseSite":
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=_file_name(frame.f_code.co_filename),
            line_number=frame.f_lineno,
        )

    @classmethod
    def from_traceback(cls, tb: Any) -> "RaiseSite":
        """Innermost frame of ``tb``; used for errors raised outside this package."""
        frames = traceback.extract_tb(tb) if tb else []
        if not frames:
            return cls.unknown()
        last = frames[-1]
        return cls("<unknown>", last.name, _file_name(last.filename), last.lineno or 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


class DigitalTwinError(Exception):
    """Base class for every error this package raises on purpose.

    Subclasses only override ``error_code``. Pass the exception being
    translated as ``cause`` and anything that helps find the failing input
    as ``context``:

        try:
            documents = await asyncio.to_thread(self.repository.load)
        except KnowledgeBaseError as e:
            raise RetrievalError("Knowledge base unavailable", cause=e) from e
    """

    error_code: str = "DT_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = self._find_raise_site()

    def _find_raise_site(self) -> RaiseSite:
        # Skip this method, __init__ and any subclass __init__ chained to it
        frame = inspect.currentframe()
        while frame is not None and frame.f_locals.get("self") is self:
            frame = frame.f_back
        return RaiseSite.from_frame(frame) if frame is not None else RaiseSite.unknown()

    @property
    def stack_trace(self) -> list[str] | None:
        """Formatted traceback of ``cause``, one entry per non-blank line."""
        if self.cause is None:
            return None
        text = "".join(traceback.format_exception(self.cause))
        return [line for line in text.splitlines() if line.strip()]

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Payload shared by API error responses, CLI output and logs.

        Args:
            include_trace: Add ``stack_trace`` from the wrapped cause. Only
                set in debug mode; traces reveal file paths.
        """
        payload: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            payload["context"] = self.extra_context
        if include_trace and self.cause is not None:
            payload["stack_trace"] = self.stack_trace
        if self.cause is not None:
            payload["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return payload
