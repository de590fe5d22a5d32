"""HTTP propagation: carry trace context across an httpx request hop.

The propagation format is injected as an OpenTelemetry TextMapPropagator. The default
is W3C TraceContext + W3C Baggage, built per caller rather than read from the
process-global propagator.

A request carries its context in ``request.extensions["tracelog.context"]``. inject()
always works on a copy so the caller's request (often shared or reused) keeps its
original headers and extensions.
"""

from __future__ import annotations

import logging

import httpx
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.context import Context
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from .semconv import request_attributes
from .span import DEFAULT_ACCESSOR, SpanAccessor

CONTEXT_EXTENSION = "tracelog.context"

_LOGGER = logging.getLogger("tracelog")
_LOGGER.addHandler(logging.NullHandler())


def default_propagator() -> TextMapPropagator:
    """W3C trace-context plus baggage."""
    return CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])


def request_context(request: httpx.Request) -> Context | None:
    """Context previously attached to request by inject(), if any."""
    ctx = request.extensions.get(CONTEXT_EXTENSION)
    return ctx if isinstance(ctx, Context) else None


def extract(request: httpx.Request, propagator: TextMapPropagator | None = None) -> Context:
    """Decode the request's propagation headers on top of its attached (or an empty) context."""
    base = request_context(request) or Context()
    ctx = (propagator or default_propagator()).extract(carrier=request.headers, context=base)
    _LOGGER.debug("extracted propagation context for %s %s", request.method, request.url.path)
    return ctx


def inject(
    context: Context,
    request: httpx.Request,
    propagator: TextMapPropagator | None = None,
    accessor: SpanAccessor = DEFAULT_ACCESSOR,
    *,
    server_name: str = "http.server",
) -> httpx.Request:
    """Return a copy of request carrying context in its extensions and headers.

    If context has an active span, HTTP attributes derived from the request are set on it
    before the headers are encoded.
    """
    clone = copy_request(request)
    clone.extensions[CONTEXT_EXTENSION] = context
    if (span := accessor.span_from_context(context)) is not None:
        accessor.set_attributes(span, request_attributes(clone, server_name))
    (propagator or default_propagator()).inject(clone.headers, context=context)
    return clone


def copy_request(request: httpx.Request) -> httpx.Request:
    """Shallow copy with its own header set and extensions; the body stream is shared."""
    clone = httpx.Request(
        request.method,
        request.url,
        headers=request.headers.copy(),
        stream=request.stream,
        extensions=dict(request.extensions),
    )
    if isinstance(request.stream, httpx.ByteStream):
        clone.read()
    return clone

