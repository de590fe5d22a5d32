"""Active-span access and span tagging.

The tracer is an injected capability: anything implementing SpanAccessor can stand in
for OpenTelemetry. The default accessor reads spans out of an OpenTelemetry Context.

A missing context, a context without a span, or a span with an invalid span context all
mean "no active span"; every operation here degrades to a no-op in that case.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from opentelemetry import trace
from opentelemetry.context import Context

from tracelog.fields.attribute import Attribute, as_mapping

if TYPE_CHECKING:
    from opentelemetry.trace import Span


@dataclass(frozen=True, slots=True)
class SpanIds:
    """Displayable identifiers of a span (lowercase hex, as OpenTelemetry renders them)."""

    trace_id: str
    span_id: str


@runtime_checkable
class SpanAccessor(Protocol):
    """Tracer capability used by the logging facade."""

    def span_from_context(self, context: Context | None) -> Span | None: ...
    def ids(self, span: Span) -> SpanIds: ...
    def set_attributes(self, span: Span, attributes: Sequence[Attribute]) -> None: ...


@dataclass(frozen=True, slots=True)
class OtelSpanAccessor:
    """SpanAccessor over opentelemetry-api. Never consults the implicit current context."""

    def span_from_context(self, context: Context | None) -> Span | None:
        if context is None:
            return None
        span = trace.get_current_span(context)
        return span if span.get_span_context().is_valid else None

    def ids(self, span: Span) -> SpanIds:
        sc = span.get_span_context()
        return SpanIds(trace.format_trace_id(sc.trace_id), trace.format_span_id(sc.span_id))

    def set_attributes(self, span: Span, attributes: Sequence[Attribute]) -> None:
        span.set_attributes(as_mapping(attributes))


DEFAULT_ACCESSOR = OtelSpanAccessor()


def active_span_ids(context: Context | None, accessor: SpanAccessor = DEFAULT_ACCESSOR) -> SpanIds | None:
    """Identifiers of the span active in context, or None."""
    if (span := accessor.span_from_context(context)) is None:
        return None
    return accessor.ids(span)


def tag_span(context: Context | None, attributes: Sequence[Attribute], accessor: SpanAccessor = DEFAULT_ACCESSOR) -> None:
    """Attach attributes, in order, to the span active in context. Last write wins per key."""
    if not attributes:
        return
    if (span := accessor.span_from_context(context)) is None:
        return
    accessor.set_attributes(span, attributes)
