"""Type aliases and error context tracking for tracelog failures.

Uses Pydantic models for validation/serialization. ErrorTrace is the payload carried by
Err results and TraceLogException, so it stays cheap to build on hot paths.
"""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

# JSON type aliases - using Any for recursive types to avoid Pydantic resolution issues
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

_EMPTY_META: JsonDict = {}


# ═══════════════════════════════════════════════════════════════════════════════
# Error Context & Provenance
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorContext(BaseModel):
    """Context for error at a call site. Tracks operation, location, metadata. Frozen for immutability."""

    model_config = ConfigDict(
        frozen=True, str_strip_whitespace=True, extra="forbid",
        revalidate_instances="never", populate_by_name=True,
    )

    operation: Annotated[str, Field(min_length=1)]
    location: str = Field(default="", repr=False)
    metadata: JsonDict = Field(default_factory=dict, repr=False)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.operation}{loc}{meta}"


_EMPTY_CONTEXTS: tuple[ErrorContext, ...] = ()


class ErrorTrace(BaseModel):
    """Stack of error contexts forming a call chain trace."""

    model_config = ConfigDict(
        frozen=True, str_strip_whitespace=True, validate_default=True, extra="forbid",
        revalidate_instances="never",
    )

    message: Annotated[str, Field(min_length=1)]
    contexts: tuple[ErrorContext, ...] = _EMPTY_CONTEXTS
    error_code: str | None = Field(default=None, repr=True)
    recoverable: bool = True
    details: str | None = Field(default=None, repr=False)

    @computed_field
    @property
    def root_operation(self) -> str | None:
        """First operation in the trace (origin)."""
        return self.contexts[0].operation if self.contexts else None

    def with_operation(self, operation: str, location: str = "", **metadata: JsonValue) -> ErrorTrace:
        """Add context with operation info (returns new trace)."""
        ctx = ErrorContext.model_construct(operation=operation, location=location, metadata=metadata or _EMPTY_META)
        return ErrorTrace.model_construct(
            message=self.message,
            contexts=(*self.contexts, ctx),
            error_code=self.error_code,
            recoverable=self.recoverable,
            details=self.details,
        )

    def format(self) -> str:
        """Format trace as human-readable string."""
        parts = [self.message]
        if self.error_code:
            parts.append(f" [{self.error_code}]")
        if self.contexts:
            parts.append("\nContext trace:\n" + "\n".join(f"  - {ctx}" for ctx in self.contexts))
        return "".join(parts)

    __str__ = format


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers (use model_construct for hot paths)
# ═══════════════════════════════════════════════════════════════════════════════


def trace(message: str, *, code: str | None = None, recoverable: bool = True) -> ErrorTrace:
    """Create ErrorTrace concisely (bypasses validation for performance)."""
    return ErrorTrace.model_construct(
        message=message,
        contexts=_EMPTY_CONTEXTS,
        error_code=code,
        recoverable=recoverable,
    )


def trace_from_exc(exc: BaseException, *, operation: str = "", code: str | None = None, **metadata: JsonValue) -> ErrorTrace:
    """Create ErrorTrace from exception with optional operation context."""
    t = ErrorTrace.model_construct(
        message=str(exc) or type(exc).__name__,
        contexts=_EMPTY_CONTEXTS,
        error_code=code,
        recoverable=True,
        details=f"{type(exc).__name__}: {exc}",
    )
    return t.with_operation(operation, **metadata) if operation else t
