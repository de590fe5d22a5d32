"""Argument classification: route a mixed argument list to log fields and span attributes.

A single variadic call site accepts typed Fields, Attributes and (in the loose flavor)
bare key/value pairs. Classification is type-driven and order-preserving within each
output sequence:

- Attribute: goes to the span.
- Field: goes to the log record.
- anything else: ignored (strict) or handed to the key/value pairer (loose).

Malformed loose input never fails the call. Non-string keys are collected as
InvalidPair records and a dangling final key is reported on the result, so the
caller can emit a single diagnostic entry.

Example:
    >>> from tracelog.fields import attribute
    >>> out = classify(["user", "ada", attribute.string("db", "pg"), 3, "x"], loose=True)
    >>> [f.key for f in out.fields]
    ['user']
    >>> out.invalid
    (InvalidPair(position=3, key=3, value='x'),)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from . import field as _field
from .attribute import Attribute
from .field import Field


@dataclass(frozen=True, slots=True)
class InvalidPair:
    """A loose pair whose key is not a string. position is the key's index in the original arguments."""

    position: int
    key: object
    value: object

    def to_dict(self) -> dict[str, object]:
        return {"position": self.position, "key": self.key, "value": self.value}


@dataclass(frozen=True, slots=True)
class DanglingKey:
    """Final loose argument with no value after it."""

    position: int
    key: object


@dataclass(frozen=True, slots=True)
class Classified:
    """Output of classification, each sequence in input order."""

    fields: tuple[Field, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    invalid: tuple[InvalidPair, ...] = ()
    dangling: DanglingKey | None = None

    @property
    def clean(self) -> bool:
        """Whether the loose arguments were all well-formed."""
        return not self.invalid and self.dangling is None


EMPTY = Classified()


def classify(args: Sequence[object], *, loose: bool = False) -> Classified:
    """Split args into fields and attributes.

    Strict flavor silently ignores anything that is neither a Field nor an Attribute.
    Loose flavor hands every non-attribute argument, with its original position, to pair().
    """
    if not args:
        return EMPTY

    attributes: list[Attribute] = []
    fields: list[Field] = []
    residual: list[tuple[int, object]] = []

    for i, arg in enumerate(args):
        match arg:
            case Attribute():
                attributes.append(arg)
            case Field() if not loose:
                fields.append(arg)
            case _ if loose:
                residual.append((i, arg))

    if not loose:
        return Classified(tuple(fields), tuple(attributes))

    paired = pair(residual)
    return Classified(paired.fields, tuple(attributes), paired.invalid, paired.dangling)


def pair(items: Iterable[tuple[int, object]]) -> Classified:
    """Pair loose (position, value) items into fields, left to right.

    - Field: kept as-is, advance by one.
    - otherwise key + next value, advance by two; a str key yields infer(key, value).
    - non-str key: recorded as InvalidPair, no field.
    - no next value: recorded as dangling, consumption stops.
    """
    seq = list(items)
    fields: list[Field] = []
    invalid: list[InvalidPair] = []
    dangling: DanglingKey | None = None

    i, n = 0, len(seq)
    while i < n:
        pos, current = seq[i]
        if isinstance(current, Field):
            fields.append(current)
            i += 1
            continue
        if i == n - 1:
            dangling = DanglingKey(pos, current)
            break
        value = seq[i + 1][1]
        if isinstance(current, str):
            fields.append(_field.infer(current, value))
        else:
            invalid.append(InvalidPair(pos, current, value))
        i += 2

    return Classified(tuple(fields), (), tuple(invalid), dangling)


def from_kwargs(kwargs: dict[str, object]) -> tuple[Field, ...]:
    """Keyword arguments as inferred fields, in call order."""
    return tuple(_field.infer(k, v) for k, v in kwargs.items())
