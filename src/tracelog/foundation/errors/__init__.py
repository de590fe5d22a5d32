"""Unified error handling for tracelog.

- ErrorCode: Standard error codes
- TraceLogException/LoggerPanic: Structured exceptions
- Result/Ok/Err: Explicit failure results
- ErrorTrace/ErrorContext: Error context stacking and provenance tracking
"""

from .errors import ErrorCode, LoggerPanic, TraceLogException
from .result import Err, Ok, Result, try_fn
from .types import ErrorContext, ErrorTrace, JsonDict, JsonValue, trace, trace_from_exc

__all__ = [
    # Core errors
    "ErrorCode", "TraceLogException", "LoggerPanic",
    # Result
    "Result", "Ok", "Err", "try_fn",
    # Error context
    "ErrorContext", "ErrorTrace", "trace", "trace_from_exc",
    # Type aliases
    "JsonDict", "JsonValue",
]
