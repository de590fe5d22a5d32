"""Error codes and exceptions for the logging facade.

Classification anomalies never raise. The exceptions here are reserved for the terminal
levels of the default structured logger and for callers that prefer raising over Result.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from .types import ErrorTrace, trace


class ErrorCode(StrEnum):
    """Standard error codes for tracelog failures."""

    SYNC_FAILED = "SYNC_FAILED"
    PANIC = "PANIC"


class TraceLogException(Exception):
    """Exception wrapping an ErrorTrace for raising."""

    __slots__ = ("error",)

    def __init__(self, error: ErrorTrace) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> str | None:
        return self.error.error_code


class LoggerPanic(TraceLogException):
    """Raised by the default logger after a panic-level entry has been written.

    Carries the message and the logger name so the host can decide whether to unwind
    further or terminate.
    """

    @classmethod
    def for_entry(cls, logger: str, message: str) -> Self:
        return cls(trace(message, code=ErrorCode.PANIC.value, recoverable=False).with_operation("logger:panic", logger=logger))
