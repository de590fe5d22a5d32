"""Shared fixtures: an SDK tracer (not installed globally) and an in-memory logger."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.sdk.trace import Span, Tracer, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from tracelog.foundation.config import CorrelationSettings, clear_settings_cache
from tracelog.logging import BoundLogger, Level, MemoryRenderer, TraceLogger


@pytest.fixture
def tracer() -> Tracer:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(InMemorySpanExporter()))
    return provider.get_tracer("tracelog.tests")


@pytest.fixture
def span(tracer: Tracer) -> Iterator[Span]:
    s = tracer.start_span("operation")
    yield s
    s.end()


@pytest.fixture
def ctx(span: Span) -> Context:
    return trace.set_span_in_context(span, Context())


@pytest.fixture
def renderer() -> MemoryRenderer:
    return MemoryRenderer()


@pytest.fixture
def base(renderer: MemoryRenderer) -> BoundLogger:
    return BoundLogger(renderer=renderer, level=Level.DEBUG)


@pytest.fixture
def log(base: BoundLogger) -> TraceLogger:
    return TraceLogger(base=base, correlation=CorrelationSettings())


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in ("TRACELOG_NAME", "TRACELOG_ENVIRONMENT", "TRACELOG_LOG_LEVEL", "TRACELOG_LOG_FORMAT", "TRACELOG_LOG_COLORS",
                "TRACELOG_CORRELATION_TRACE_ID_KEY", "TRACELOG_CORRELATION_SPAN_ID_KEY",
                "TRACELOG_CORRELATION_VENDOR_PREFIX"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def ids(span: Span) -> tuple[str, str]:
    """(trace_id, span_id) of the span fixture as lowercase hex."""
    sc = span.get_span_context()
    return trace.format_trace_id(sc.trace_id), trace.format_span_id(sc.span_id)
