"""Classification of Python objects into the comparable value variants."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any


class ValueKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    TIMESTAMP = "timestamp"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPAQUE = "opaque"


NUMBER_TYPES = (int, float, Decimal, Fraction)


@dataclasses.dataclass(frozen=True)
class TaggedRecord:
    """
    A named, fixed-shape aggregate.

    Two records are comparable field by field only when their tags match.
    Dataclass instances are treated as records too, tagged by their class.
    """
    tag: Any
    fields: Mapping = dataclasses.field(default_factory=dict)


def kind_of(value: Any) -> ValueKind:
    """Classify a value into one of the variants."""
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, NUMBER_TYPES):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, TaggedRecord):
        return ValueKind.RECORD
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ValueKind.RECORD
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.OPAQUE


def record_tag(record: Any) -> Any:
    if isinstance(record, TaggedRecord):
        return record.tag
    return type(record)


def record_fields(record: Any) -> Mapping:
    """Shallow field mapping of a record; nested values are left untouched."""
    if isinstance(record, TaggedRecord):
        return record.fields
    return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}


def tag_name(tag: Any) -> str:
    if isinstance(tag, type):
        return tag.__qualname__
    return str(tag)

