"""Structured logging module: trace-correlated facade over a pluggable structured logger."""

from .base import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    Level,
    LogEntry,
    LogRenderer,
    MemoryRenderer,
    NoOpRenderer,
    StructuredLogger,
    configure_logging,
    create_renderer,
)
from .logger import DANGLING_KEY_MESSAGE, INVALID_PAIRS_MESSAGE, TraceLogger, get_logger, sprintf

__all__ = [
    # Facade
    "TraceLogger",
    "get_logger",
    "sprintf",
    "DANGLING_KEY_MESSAGE",
    "INVALID_PAIRS_MESSAGE",
    # Underlying logger
    "BoundLogger",
    "Level",
    "LogEntry",
    "StructuredLogger",
    "configure_logging",
    # Renderers
    "ConsoleRenderer",
    "JsonRenderer",
    "LogRenderer",
    "MemoryRenderer",
    "NoOpRenderer",
    "create_renderer",
]
