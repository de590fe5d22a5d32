"""Tracing module: span access, span tagging and HTTP context propagation."""

from .propagation import CONTEXT_EXTENSION, copy_request, default_propagator, extract, inject, request_context
from .semconv import enduser_attributes, net_attributes, request_attributes, server_attributes
from .span import DEFAULT_ACCESSOR, OtelSpanAccessor, SpanAccessor, SpanIds, active_span_ids, tag_span

__all__ = [
    # Span
    "DEFAULT_ACCESSOR",
    "OtelSpanAccessor",
    "SpanAccessor",
    "SpanIds",
    "active_span_ids",
    "tag_span",
    # Semantic conventions
    "enduser_attributes",
    "net_attributes",
    "request_attributes",
    "server_attributes",
    # Propagation
    "CONTEXT_EXTENSION",
    "copy_request",
    "default_propagator",
    "extract",
    "inject",
    "request_context",
]
