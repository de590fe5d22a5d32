"""Default structured logger and renderers.

The logging facade treats its underlying logger as an injected capability (the
StructuredLogger protocol). BoundLogger is the implementation shipped with the package:
immutable, with typed persistent fields, a pluggable renderer, and zap-style terminal
levels.

- dpanic: raises LoggerPanic after writing, in development only
- panic: raises LoggerPanic after writing
- fatal: calls the on_fatal hook after writing (default: sys.exit(1))

Quick Start:
    >>> from tracelog.fields.field import string
    >>> log = configure_logging(format="console", level="DEBUG", name="api")
    >>> log.info("request received", string("path", "/users"))
    # => 10:30:45.123 [info] api request received path="/users"
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import IntEnum
from typing import Protocol, TextIO, runtime_checkable

import orjson

from tracelog.fields.field import Field, FieldType
from tracelog.foundation.errors import JsonDict, LoggerPanic


class Level(IntEnum):
    """Log levels, ordered by severity. Values line up with stdlib logging where they overlap."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    DPANIC = 45
    PANIC = 50
    FATAL = 60

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str | int | Level) -> Level:
        """Accept a Level, its int value, or a case-insensitive name ("warning" maps to WARN)."""
        if isinstance(value, int):
            return cls(value)
        name = value.upper()
        if name == "WARNING":
            return cls.WARN
        if name not in cls.__members__:
            raise ValueError(f"Unknown level: {value}. Use one of: {', '.join(m.lower() for m in cls.__members__)}")
        return cls[name]


# ─────────────────────────────────────────────────────────────────────────────
# Entries & Renderers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LogEntry:
    """Immutable log entry handed to a renderer."""

    timestamp: float
    level: Level
    logger: str
    message: str
    fields: tuple[Field, ...] = ()

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """Human-readable timestamp (HH:MM:SS.mmm)."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]

    @property
    def context(self) -> JsonDict:
        """Encoded field values by key. Later fields with the same key win; skip fields are dropped."""
        return {f.key: f.encoded() for f in self.fields if f.type is not FieldType.SKIP}


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...
    def flush(self) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] logger message key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        parts = [f"{c['dim']}{entry.ts_human}{c['reset']}"] if self.show_timestamp else []
        parts.append(f"{_LEVEL_COLORS.get(entry.level, c['red']) if self.colors else ''}[{entry.level.label}]{c['reset']}")
        if entry.logger:
            parts.append(f"{c['dim']}{entry.logger}{c['reset']}")
        parts.append(f"{c['bold']}{entry.message}{c['reset']}")
        parts += [f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}" for k, v in entry.context.items()]
        print(" ".join(parts), file=self.output)

    def flush(self) -> None:
        self.output.flush()


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation. Entry keys win over fields with the same name."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.ts_iso, "level": entry.level.label, "message": entry.message}
        if entry.logger:
            record["logger"] = entry.logger
        record.update((k, v) for k, v in entry.context.items() if k not in record)
        print(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=repr).decode(),
              file=self.output)

    def flush(self) -> None:
        self.output.flush()


@dataclass(slots=True)
class MemoryRenderer:
    """Keeps entries in memory. Used by tests and by callers that inspect output."""

    entries: list[LogEntry] = field(default_factory=list)

    def render(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def flush(self) -> None:
        pass

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.entries]

    def clear(self) -> None:
        self.entries.clear()


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer."""

    def render(self, entry: LogEntry) -> None:
        pass

    def flush(self) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Logger Protocol & Implementation
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class StructuredLogger(Protocol):
    """What the logging facade needs from an underlying logger."""

    @property
    def name(self) -> str: ...
    @property
    def fields(self) -> tuple[Field, ...]: ...
    def enabled(self, level: Level) -> bool: ...
    def log(self, level: Level, message: str, fields: Iterable[Field] = ()) -> None: ...
    def with_fields(self, fields: Iterable[Field]) -> StructuredLogger: ...
    def named(self, name: str) -> StructuredLogger: ...
    def sync(self) -> None: ...


def _exit(entry: LogEntry) -> None:
    logging.getLogger("tracelog").debug("fatal entry from %r, exiting", entry.logger)
    sys.exit(1)


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Structured logger with bound fields. Immutable - with_fields() and named() return new loggers.

    Example:
        >>> log = BoundLogger(renderer=MemoryRenderer()).named("api")
        >>> log.with_fields([string("region", "eu")]).info("ready")
    """

    name: str = ""
    fields: tuple[Field, ...] = ()
    renderer: LogRenderer = field(default_factory=ConsoleRenderer)
    level: Level = Level.INFO
    development: bool = False
    on_fatal: Callable[[LogEntry], None] = _exit

    def enabled(self, level: Level) -> bool:
        return level >= self.level

    def with_fields(self, fields: Iterable[Field]) -> BoundLogger:
        """Create new logger with additional persistent fields."""
        if not (extra := tuple(fields)):
            return self
        return replace(self, fields=self.fields + extra)

    def named(self, name: str) -> BoundLogger:
        """Add a sub-scope to the logger name, joined with '.'."""
        if not name:
            return self
        return replace(self, name=f"{self.name}.{name}" if self.name else name)

    def log(self, level: Level, message: str, fields: Iterable[Field] = ()) -> None:
        entry = LogEntry(time.time(), level, self.name, message, self.fields + tuple(fields))
        if self.enabled(level):
            self.renderer.render(entry)
        self._terminate(entry)

    def debug(self, message: str, *fields: Field) -> None: self.log(Level.DEBUG, message, fields)
    def info(self, message: str, *fields: Field) -> None: self.log(Level.INFO, message, fields)
    def warn(self, message: str, *fields: Field) -> None: self.log(Level.WARN, message, fields)
    def error(self, message: str, *fields: Field) -> None: self.log(Level.ERROR, message, fields)
    def dpanic(self, message: str, *fields: Field) -> None: self.log(Level.DPANIC, message, fields)
    def panic(self, message: str, *fields: Field) -> None: self.log(Level.PANIC, message, fields)
    def fatal(self, message: str, *fields: Field) -> None: self.log(Level.FATAL, message, fields)

    def sync(self) -> None:
        """Flush the renderer output. OSError/ValueError propagate to the caller."""
        self.renderer.flush()

    def _terminate(self, entry: LogEntry) -> None:
        match entry.level:
            case Level.DPANIC if self.development:
                raise LoggerPanic.for_entry(self.name, entry.message)
            case Level.PANIC:
                raise LoggerPanic.for_entry(self.name, entry.message)
            case Level.FATAL:
                self.on_fatal(entry)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


def create_renderer(format: str = "console", *, output: TextIO | None = None, colors: bool | None = None) -> LogRenderer:  # noqa: A002
    """Build a renderer. Format: "console" (human), "json" (machine), "none"."""
    match format:
        case "console": return ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": return JsonRenderer(output=output or sys.stdout)
        case "none": return NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")


def configure_logging(
    format: str = "console",  # noqa: A002 - matches settings key
    level: str | Level = "INFO",
    *,
    name: str = "",
    output: TextIO | None = None,
    colors: bool | None = None,
    development: bool = False,
    on_fatal: Callable[[LogEntry], None] | None = None,
) -> BoundLogger:
    """Build the default structured logger."""
    return BoundLogger(
        name=name,
        renderer=create_renderer(format, output=output, colors=colors),
        level=Level.parse(level),
        development=development,
        on_fatal=on_fatal or _exit,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {Level.DEBUG: _COLORS["dim"], Level.INFO: _COLORS["green"], Level.WARN: _COLORS["yellow"],
                 Level.ERROR: _COLORS["red"]}


def _format_value(v: object, c: dict[str, str]) -> str:
    """Format a value for console output."""
    match v:
        case str(): return f'{c["yellow"]}"{v}"{c["reset"]}'
        case bool(): return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
        case int() | float(): return f'{c["blue"]}{v}{c["reset"]}'
        case None: return f'{c["dim"]}null{c["reset"]}'
        case dict(): return f'{c["dim"]}{{{len(v)} items}}{c["reset"]}'
        case list() | tuple(): return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
        case _: return f'{c["white"]}{v!r}{c["reset"]}'
