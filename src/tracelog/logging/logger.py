"""Trace-correlated logging facade.

TraceLogger wraps a structured logger and an OpenTelemetry context. Every log call
classifies its arguments, writes trace attributes to the span active in the bound
context, and forwards the remaining fields to the underlying logger. Binding a context
with an active span adds trace/span identifier fields (plus vendor aliases) so each line
self-correlates.

Quick Start:
    >>> from tracelog import attribute, field, get_logger
    >>> log = get_logger("checkout")
    >>> with tracer.start_as_current_span("charge") as span:
    ...     log = log.with_current_context()
    ...     log.info("charging", field.integer("cents", 1299), attribute.string("payment.provider", "stripe"))
    ...     log.infow("charged", "order", order_id, retries=0)

Call shapes per level:
    info(msg, *args)            typed Fields and Attributes; anything else is ignored
    infof(template, *args)      printf-style interpolation of the non-field arguments
    infow(msg, *kv, **fields)   loose key/value pairs, typed Fields allowed in between

Loggers are immutable: with_fields(), with_context(), named() and from_request() all
return new instances and never touch the original.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from opentelemetry import context as otel_context
from opentelemetry.context import Context
from opentelemetry.propagators.textmap import TextMapPropagator

from tracelog.fields import field as _field
from tracelog.fields.attribute import Attribute
from tracelog.fields.classify import Classified, classify, from_kwargs
from tracelog.fields.field import Field
from tracelog.foundation.config import CorrelationSettings, TracelogSettings, get_settings
from tracelog.foundation.errors import ErrorCode, ErrorTrace, Result, try_fn
from tracelog.tracing.propagation import default_propagator, extract, inject
from tracelog.tracing.span import DEFAULT_ACCESSOR, SpanAccessor, SpanIds, active_span_ids, tag_span

from .base import Level, StructuredLogger, configure_logging

if TYPE_CHECKING:
    import httpx

INVALID_PAIRS_MESSAGE = "ignored key-value pairs with non-string keys"
DANGLING_KEY_MESSAGE = "ignored key without a value"


@dataclass(frozen=True, slots=True, eq=False)
class TraceLogger:
    """Structured logger bound to a propagation context.

    Args:
        base: Underlying structured logger (shared, never mutated)
        context: Bound OpenTelemetry context, None when nothing is bound
        accessor: Tracer capability used to find and tag the active span
        propagator: Propagation codec used by from_request()/with_request()
        correlation: Names of the trace-derived fields
    """

    base: StructuredLogger
    context: Context | None = None
    accessor: SpanAccessor = DEFAULT_ACCESSOR
    propagator: TextMapPropagator = field(default_factory=default_propagator)
    correlation: CorrelationSettings = field(default_factory=CorrelationSettings)
    trace_fields: tuple[Field, ...] = ()

    # ─── Derivation ─────────────────────────────────────────────────────

    @property
    def fields(self) -> tuple[Field, ...]:
        """Persistent fields written on every entry."""
        return (*self.base.fields, *self.trace_fields)

    @property
    def span_ids(self) -> SpanIds | None:
        """Identifiers of the span active in the bound context."""
        return active_span_ids(self.context, self.accessor)

    def named(self, name: str) -> TraceLogger:
        """Add a sub-scope to the logger's name."""
        return replace(self, base=self.base.named(name))

    def with_fields(self, *args: object, **fields: object) -> TraceLogger:
        """New logger with extra persistent fields.

        Accepts typed Fields, loose key/value pairs and keyword fields. Attributes are set
        on the span active in the bound context right away.
        """
        c = classify(args, loose=True)
        self._report(c)
        tag_span(self.context, c.attributes, self.accessor)
        return replace(self, base=self.base.with_fields((*c.fields, *from_kwargs(fields))))

    def with_context(self, ctx: Context | None) -> TraceLogger:
        """New logger bound to ctx.

        With an active span the logger carries trace and span identifiers, each under its
        plain name and its vendor alias. Previously derived identifiers are replaced.
        """
        ids = active_span_ids(ctx, self.accessor)
        return replace(self, context=ctx, trace_fields=self._derive(ids) if ids else ())

    def with_current_context(self) -> TraceLogger:
        """Bind the implicit OpenTelemetry current context."""
        return self.with_context(otel_context.get_current())

    def from_request(self, request: httpx.Request) -> TraceLogger:
        """Bind the context decoded from an inbound request's propagation headers."""
        return self.with_context(extract(request, self.propagator))

    def with_request(self, ctx: Context, request: httpx.Request) -> httpx.Request:
        """Copy of an outbound request carrying ctx, tagging the active span with HTTP attributes."""
        return inject(ctx, request, self.propagator, self.accessor)

    # ─── Strict flavor ──────────────────────────────────────────────────

    def debug(self, msg: str, *args: object) -> None: self._log(Level.DEBUG, msg, classify(args))
    def info(self, msg: str, *args: object) -> None: self._log(Level.INFO, msg, classify(args))
    def warn(self, msg: str, *args: object) -> None: self._log(Level.WARN, msg, classify(args))
    def error(self, msg: str, *args: object) -> None: self._log(Level.ERROR, msg, classify(args))
    def dpanic(self, msg: str, *args: object) -> None: self._log(Level.DPANIC, msg, classify(args))
    def panic(self, msg: str, *args: object) -> None: self._log(Level.PANIC, msg, classify(args))
    def fatal(self, msg: str, *args: object) -> None: self._log(Level.FATAL, msg, classify(args))

    warning = warn

    # ─── Template flavor ────────────────────────────────────────────────

    def debugf(self, template: str, *args: object) -> None: self._logf(Level.DEBUG, template, args)
    def infof(self, template: str, *args: object) -> None: self._logf(Level.INFO, template, args)
    def warnf(self, template: str, *args: object) -> None: self._logf(Level.WARN, template, args)
    def errorf(self, template: str, *args: object) -> None: self._logf(Level.ERROR, template, args)
    def dpanicf(self, template: str, *args: object) -> None: self._logf(Level.DPANIC, template, args)
    def panicf(self, template: str, *args: object) -> None: self._logf(Level.PANIC, template, args)
    def fatalf(self, template: str, *args: object) -> None: self._logf(Level.FATAL, template, args)

    # ─── Loose flavor ───────────────────────────────────────────────────

    def debugw(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.DEBUG, msg, kv, fields)
    def infow(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.INFO, msg, kv, fields)
    def warnw(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.WARN, msg, kv, fields)
    def errorw(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.ERROR, msg, kv, fields)
    def dpanicw(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.DPANIC, msg, kv, fields)
    def panicw(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.PANIC, msg, kv, fields)
    def fatalw(self, msg: str, *kv: object, **fields: object) -> None: self._logw(Level.FATAL, msg, kv, fields)

    # ─── Misc ───────────────────────────────────────────────────────────

    def level_enabled(self, level: str | int | Level) -> bool:
        return self.base.enabled(Level.parse(level))

    def sync(self) -> Result[None, ErrorTrace]:
        """Flush the underlying logger. Failures come back as Err, never raised or dropped."""
        return try_fn(self.base.sync, operation="logger:sync", code=ErrorCode.SYNC_FAILED.value)

    # ─── Internals ──────────────────────────────────────────────────────

    def _logf(self, level: Level, template: str, args: Sequence[object]) -> None:
        fmt_args = [a for a in args if not isinstance(a, (Field, Attribute))]
        self._log(level, sprintf(template, fmt_args), classify(args))

    def _logw(self, level: Level, msg: str, kv: Sequence[object], fields: dict[str, object]) -> None:
        self._log(level, msg, classify(kv, loose=True), from_kwargs(fields))

    def _log(self, level: Level, msg: str, c: Classified, extra: tuple[Field, ...] = ()) -> None:
        self._report(c)
        tag_span(self.context, c.attributes, self.accessor)
        self.base.log(level, msg, (*self.trace_fields, *c.fields, *extra))

    def _report(self, c: Classified) -> None:
        """One warning per malformed-argument condition, written before the caller's entry."""
        if c.clean:
            return
        if c.invalid:
            self.base.log(Level.WARN, INVALID_PAIRS_MESSAGE,
                          (*self.trace_fields, _field.obj("invalid", [p.to_dict() for p in c.invalid])))
        if c.dangling is not None:
            self.base.log(Level.WARN, DANGLING_KEY_MESSAGE,
                          (*self.trace_fields, _field.infer("ignored", c.dangling.key)))

    def _derive(self, ids: SpanIds) -> tuple[Field, ...]:
        trace_key, trace_alias = self.correlation.trace_id_keys
        span_key, span_alias = self.correlation.span_id_keys
        return (
            _field.string(trace_key, ids.trace_id),
            _field.string(trace_alias, ids.trace_id),
            _field.string(span_key, ids.span_id),
            _field.string(span_alias, ids.span_id),
        )


def sprintf(template: str, args: Sequence[object]) -> str:
    """printf-style interpolation that never raises.

    No args: template verbatim. Empty template: args joined with spaces. A mismatch
    appends the arguments as %!(EXTRA ...) instead of failing.
    """
    if not args:
        return template
    if not template:
        return " ".join(str(a) for a in args)
    try:
        if len(args) == 1 and isinstance(args[0], Mapping):
            return template % args[0]
        return template % tuple(args)
    except (TypeError, ValueError, KeyError, OverflowError):
        return f"{template}%!(EXTRA {', '.join(repr(a) for a in args)})"


def get_logger(
    name: str = "",
    *,
    settings: TracelogSettings | None = None,
    base: StructuredLogger | None = None,
    accessor: SpanAccessor = DEFAULT_ACCESSOR,
    propagator: TextMapPropagator | None = None,
) -> TraceLogger:
    """Build a TraceLogger. Without base, the default structured logger is configured from settings."""
    settings = settings or get_settings()
    if base is None:
        base = configure_logging(
            settings.log.format,
            settings.log.level,
            name=settings.name,
            colors=settings.log.colors,
            development=settings.is_development,
        )
    return TraceLogger(
        base=base.named(name),
        accessor=accessor,
        propagator=propagator or default_propagator(),
        correlation=settings.correlation,
    )
