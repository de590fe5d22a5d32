"""tracelog - structured logging correlated with OpenTelemetry traces.

Every log call copies the active span's trace and span identifiers into the log record,
and can copy caller-supplied attributes onto that span. HTTP helpers carry the trace
context across an outbound/inbound request hop.

Quick Start:
    >>> from tracelog import attribute, field, get_logger
    >>> log = get_logger("api")
    >>>
    >>> # Bind a context; the span's identifiers land on every line
    >>> log = log.with_context(ctx)
    >>> log.info("user loaded", field.string("user", "ada"), attribute.boolean("cache.hit", True))
    >>>
    >>> # Loose key/value pairs
    >>> log.infow("user loaded", "user", "ada", "attempt", 2, region="eu")

HTTP Propagation:
    >>> # Server side: decode the inbound headers and bind
    >>> log = log.from_request(inbound)
    >>>
    >>> # Client side: copy of the request carrying the context
    >>> outbound = log.with_request(ctx, httpx.Request("GET", "https://billing/api"))

Configuration:
    >>> # TRACELOG_LOG_FORMAT=json TRACELOG_LOG_LEVEL=DEBUG TRACELOG_ENVIRONMENT=development
    >>> from tracelog import get_settings
    >>> get_settings().log.format
"""

from .fields import Attribute, Field, FieldType, InvalidPair, attribute, classify, field
from .foundation.config import TracelogSettings, clear_settings_cache, get_settings
from .foundation.errors import Err, ErrorCode, ErrorTrace, LoggerPanic, Ok, Result, TraceLogException
from .logging import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    Level,
    LogEntry,
    MemoryRenderer,
    NoOpRenderer,
    StructuredLogger,
    TraceLogger,
    configure_logging,
    get_logger,
)
from .tracing import OtelSpanAccessor, SpanAccessor, SpanIds, default_propagator, extract, inject, tag_span

__version__ = "0.1.0"

__all__ = [
    # Facade
    "TraceLogger",
    "get_logger",
    # Fields & attributes
    "Attribute",
    "Field",
    "FieldType",
    "InvalidPair",
    "attribute",
    "classify",
    "field",
    # Underlying logger
    "BoundLogger",
    "ConsoleRenderer",
    "JsonRenderer",
    "Level",
    "LogEntry",
    "MemoryRenderer",
    "NoOpRenderer",
    "StructuredLogger",
    "configure_logging",
    # Tracing
    "OtelSpanAccessor",
    "SpanAccessor",
    "SpanIds",
    "default_propagator",
    "extract",
    "inject",
    "tag_span",
    # Errors
    "Err",
    "ErrorCode",
    "ErrorTrace",
    "LoggerPanic",
    "Ok",
    "Result",
    "TraceLogException",
    # Config
    "TracelogSettings",
    "clear_settings_cache",
    "get_settings",
]
