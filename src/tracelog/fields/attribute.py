"""Trace attributes: key/value tags destined for the active span, not the log record.

Values follow OpenTelemetry attribute rules: str, bool, int, float, or a homogeneous
sequence of one of those.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from opentelemetry.util.types import AttributeValue


@dataclass(frozen=True, slots=True)
class Attribute:
    """Immutable span attribute."""

    key: str
    value: AttributeValue


def string(key: str, value: str) -> Attribute:
    return Attribute(key, value)


def boolean(key: str, value: bool) -> Attribute:
    return Attribute(key, value)


def integer(key: str, value: int) -> Attribute:
    return Attribute(key, value)


def number(key: str, value: float) -> Attribute:
    return Attribute(key, value)


def strings(key: str, values: Sequence[str]) -> Attribute:
    return Attribute(key, tuple(values))


def infer(key: str, value: object) -> Attribute:
    """Coerce value into a valid attribute value; unsupported types become their str()."""
    match value:
        case str() | bool() | int() | float():
            return Attribute(key, value)
        case list() | tuple() if _homogeneous(value):
            return Attribute(key, tuple(value))
        case _:
            return Attribute(key, str(value))


def as_mapping(attrs: Sequence[Attribute]) -> dict[str, AttributeValue]:
    """Collapse attributes into a dict; later keys overwrite earlier ones."""
    return {a.key: a.value for a in attrs}


def _homogeneous(values: Sequence[object]) -> bool:
    if not values:
        return True
    first = type(values[0])
    return first in (str, bool, int, float) and all(type(v) is first for v in values)
