"""Tests for argument classification and key/value pairing.

Validates:
- Strict flavor routing (fields, attributes, ignored values)
- Loose flavor pairing with positions from the original argument list
- Non-string keys and dangling keys degrade without failing
"""

from __future__ import annotations

from datetime import timedelta

from tracelog.fields import Attribute, Field, FieldType, InvalidPair, attribute, classify, field, pair
from tracelog.fields.classify import DanglingKey, from_kwargs


# ═════════════════════════════════════════════════════════════════════════════
# Strict Flavor
# ═════════════════════════════════════════════════════════════════════════════


def test_typed_fields_pass_through_in_order() -> None:
    fields = [field.string("a", "1"), field.integer("b", 2), field.boolean("c", True)]
    out = classify(fields)
    assert out.fields == tuple(fields)
    assert out.attributes == ()


def test_typed_attributes_route_to_span_in_order() -> None:
    attrs = [attribute.string("db.system", "postgres"), attribute.integer("retry", 1)]
    out = classify(attrs)
    assert out.attributes == tuple(attrs)
    assert out.fields == ()


def test_strict_mixture_is_split_preserving_relative_order() -> None:
    f1, f2 = field.string("a", "x"), field.number("b", 1.5)
    a1, a2 = attribute.string("k1", "v1"), attribute.boolean("k2", False)
    out = classify([f1, a1, f2, a2])
    assert out.fields == (f1, f2)
    assert out.attributes == (a1, a2)


def test_strict_ignores_unrecognized_values() -> None:
    f = field.string("a", "x")
    out = classify(["loose", 42, f, None, object()])
    assert out.fields == (f,)
    assert out.clean


def test_empty_arguments() -> None:
    out = classify([], loose=True)
    assert out.fields == () and out.attributes == () and out.clean


# ═════════════════════════════════════════════════════════════════════════════
# Loose Flavor
# ═════════════════════════════════════════════════════════════════════════════


def test_loose_pair_becomes_named_field() -> None:
    out = classify(["user", "ada", "attempt", 3], loose=True)
    assert out.fields == (field.string("user", "ada"), field.integer("attempt", 3))


def test_loose_values_of_any_type_are_inferred() -> None:
    err = ValueError("boom")
    out = classify(["elapsed", timedelta(seconds=2), "err", err, "meta", {"a": 1}], loose=True)
    assert [f.type for f in out.fields] == [FieldType.DURATION, FieldType.ERROR, FieldType.OBJECT]
    assert out.fields[1].value is err


def test_loose_typed_fields_interleave_with_pairs() -> None:
    f = field.boolean("cached", True)
    out = classify(["user", "ada", f, "attempt", 2], loose=True)
    assert out.fields == (field.string("user", "ada"), f, field.integer("attempt", 2))


def test_loose_attributes_are_removed_before_pairing() -> None:
    a = attribute.string("peer", "db")
    out = classify(["user", a, "ada"], loose=True)
    assert out.attributes == (a,)
    assert out.fields == (field.string("user", "ada"),)


def test_non_string_key_records_invalid_pair_at_original_position() -> None:
    a = attribute.string("k", "v")
    out = classify(["ok", 1, a, 42, "value", "after", True], loose=True)
    assert out.invalid == (InvalidPair(position=3, key=42, value="value"),)
    assert out.fields == (field.integer("ok", 1), field.boolean("after", True))
    assert out.attributes == (a,)


def test_every_invalid_pair_is_collected() -> None:
    out = classify([1, "a", ("t",), "b", "good", "c"], loose=True)
    assert [p.position for p in out.invalid] == [0, 2]
    assert out.fields == (field.string("good", "c"),)


def test_dangling_key_is_reported_and_preceding_pairs_survive() -> None:
    out = classify(["user", "ada", "orphan"], loose=True)
    assert out.fields == (field.string("user", "ada"),)
    assert out.dangling == DanglingKey(position=2, key="orphan")
    assert not out.clean


def test_field_in_value_position_is_rekeyed() -> None:
    out = classify(["renamed", field.integer("orig", 7)], loose=True)
    assert out.fields == (Field("renamed", FieldType.INT, 7),)


def test_pair_stops_at_dangling_key() -> None:
    out = pair([(0, "a"), (1, 1), (5, "tail")])
    assert out.fields == (field.integer("a", 1),)
    assert out.dangling == DanglingKey(5, "tail")


def test_kwargs_become_inferred_fields_in_call_order() -> None:
    assert from_kwargs({"b": 2, "a": "x"}) == (field.integer("b", 2), field.string("a", "x"))


def test_invalid_pair_serializes_for_diagnostics() -> None:
    assert InvalidPair(4, 1, "v").to_dict() == {"position": 4, "key": 1, "value": "v"}


def test_attribute_is_not_a_field() -> None:
    assert not isinstance(attribute.string("a", "b"), Field)
    assert not isinstance(field.string("a", "b"), Attribute)
