"""Tests for typed fields and span attributes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel

from tracelog.fields import FieldType, attribute, field


class _Payload(BaseModel):
    id: int
    tags: list[str]


def test_infer_checks_bool_before_int() -> None:
    assert field.infer("flag", True).type is FieldType.BOOL
    assert field.infer("count", 1).type is FieldType.INT


def test_infer_maps_python_types() -> None:
    when = datetime(2024, 1, 3, 10, 30, tzinfo=UTC)
    cases = {
        "s": ("x", FieldType.STRING),
        "f": (1.5, FieldType.FLOAT),
        "b": (b"\x00", FieldType.BYTES),
        "t": (when, FieldType.TIME),
        "d": (timedelta(milliseconds=5), FieldType.DURATION),
        "e": (KeyError("k"), FieldType.ERROR),
        "o": ([1, 2], FieldType.OBJECT),
    }
    for key, (value, expected) in cases.items():
        assert field.infer(key, value).type is expected, key


def test_encoded_values_are_json_friendly() -> None:
    assert field.duration("d", timedelta(seconds=1, milliseconds=500)).encoded() == 1.5
    assert field.timestamp("t", datetime(2024, 1, 3, tzinfo=UTC)).encoded() == "2024-01-03T00:00:00+00:00"
    assert field.binary("b", b"hi").encoded() == "aGk="
    assert field.error(RuntimeError("boom")).encoded() == "boom"
    assert field.obj("o", {"n": (1, 2), 3: None}).encoded() == {"n": [1, 2], "3": None}
    assert field.obj("m", _Payload(id=1, tags=["a"])).encoded() == {"id": 1, "tags": ["a"]}


def test_error_without_exception_is_skipped() -> None:
    assert field.error(None).type is FieldType.SKIP
    assert field.error(ValueError("x")).key == "error"


def test_rekey_keeps_type_and_value() -> None:
    f = field.integer("a", 1).rekey("b")
    assert (f.key, f.type, f.value) == ("b", FieldType.INT, 1)


def test_attribute_infer_coerces_to_valid_values() -> None:
    assert attribute.infer("n", 3).value == 3
    assert attribute.infer("l", ["a", "b"]).value == ("a", "b")
    assert attribute.infer("mixed", ["a", 1]).value == "['a', 1]"
    assert attribute.infer("obj", object).value == str(object)


def test_attribute_mapping_is_last_write_wins() -> None:
    attrs = [attribute.string("k", "first"), attribute.string("other", "x"), attribute.string("k", "second")]
    assert attribute.as_mapping(attrs) == {"k": "second", "other": "x"}
