"""Foundation: error handling and configuration shared by every tracelog layer."""

from .config import TracelogSettings, get_settings
from .errors import Err, ErrorCode, ErrorTrace, LoggerPanic, Ok, Result, TraceLogException

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorTrace",
    "LoggerPanic",
    "Ok",
    "Result",
    "TraceLogException",
    "TracelogSettings",
    "get_settings",
]
