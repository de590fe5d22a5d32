"""Strongly-typed structured log fields.

A Field is a name, a semantic type tag and a value. Renderers read the type tag to
encode the value; the classifier reads the Python type to route it to the log record.

Example:
    >>> from tracelog.fields import field
    >>> field.string("user", "ada")
    Field(key='user', type=<FieldType.STRING: 'string'>, value='ada')
    >>> field.infer("elapsed", timedelta(seconds=2)).type
    <FieldType.DURATION: 'duration'>
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from tracelog.foundation.errors import JsonValue


class FieldType(StrEnum):
    """Semantic type tag of a Field."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    BYTES = "bytes"
    DURATION = "duration"
    TIME = "time"
    ERROR = "error"
    OBJECT = "object"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class Field:
    """Immutable structured field attached to a log record."""

    key: str
    type: FieldType
    value: object = None

    def encoded(self) -> JsonValue:
        """JSON-friendly rendition of the value."""
        match self.type:
            case FieldType.ERROR:
                return str(self.value) or type(self.value).__name__
            case FieldType.DURATION:
                return self.value.total_seconds()  # type: ignore[union-attr]
            case FieldType.TIME:
                return self.value.isoformat()  # type: ignore[union-attr]
            case FieldType.BYTES:
                return base64.b64encode(self.value).decode("ascii")  # type: ignore[arg-type]
            case FieldType.OBJECT:
                return _encode_object(self.value)
            case _:
                return self.value  # type: ignore[return-value]

    def rekey(self, key: str) -> Field:
        """Same value and type under another name."""
        return Field(key, self.type, self.value)


# ─────────────────────────────────────────────────────────────────────────────
# Constructors
# ─────────────────────────────────────────────────────────────────────────────


def string(key: str, value: str) -> Field:
    return Field(key, FieldType.STRING, value)


def integer(key: str, value: int) -> Field:
    return Field(key, FieldType.INT, value)


def number(key: str, value: float) -> Field:
    return Field(key, FieldType.FLOAT, value)


def boolean(key: str, value: bool) -> Field:
    return Field(key, FieldType.BOOL, value)


def binary(key: str, value: bytes) -> Field:
    return Field(key, FieldType.BYTES, bytes(value))


def duration(key: str, value: timedelta) -> Field:
    return Field(key, FieldType.DURATION, value)


def timestamp(key: str, value: datetime) -> Field:
    return Field(key, FieldType.TIME, value)


def error(err: BaseException | None) -> Field:
    """Field under the conventional "error" key. None yields a skipped field."""
    return named_error("error", err)


def named_error(key: str, err: BaseException | None) -> Field:
    if err is None:
        return skip()
    return Field(key, FieldType.ERROR, err)


def obj(key: str, value: object) -> Field:
    """Opaque value, encoded on a best-effort basis."""
    return Field(key, FieldType.OBJECT, value)


def skip() -> Field:
    """No-op field, dropped by every renderer."""
    return Field("", FieldType.SKIP)


def infer(key: str, value: object) -> Field:
    """Pick the narrowest field type for value (bool is checked before int)."""
    match value:
        case Field():
            return value.rekey(key)
        case bool():
            return boolean(key, value)
        case int():
            return integer(key, value)
        case float():
            return number(key, value)
        case str():
            return string(key, value)
        case bytes() | bytearray():
            return binary(key, value)
        case timedelta():
            return duration(key, value)
        case datetime():
            return timestamp(key, value)
        case BaseException():
            return named_error(key, value)
        case _:
            return obj(key, value)


def _encode_object(value: object) -> JsonValue:
    match value:
        case None | str() | bool() | int() | float():
            return value
        case Field():
            return value.encoded()
        case dict():
            return {str(k): _encode_object(v) for k, v in value.items()}
        case list() | tuple() | set() | frozenset():
            return [_encode_object(v) for v in value]
        case _:
            if hasattr(value, "model_dump"):
                return value.model_dump(mode="json")  # type: ignore[no-any-return]
            return repr(value)
