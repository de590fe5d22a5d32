"""Fields, attributes and argument classification."""

from . import attribute, field
from .attribute import Attribute
from .classify import Classified, DanglingKey, InvalidPair, classify, from_kwargs, pair
from .field import Field, FieldType

__all__ = [
    "Attribute",
    "Classified",
    "DanglingKey",
    "Field",
    "FieldType",
    "InvalidPair",
    "attribute",
    "classify",
    "field",
    "from_kwargs",
    "pair",
]
