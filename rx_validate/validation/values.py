"""
Value model for decoded documents.

Decoded JSON/YAML is used as-is: ``None``, ``bool``, ``int``/``float``,
``str``, ``list`` and ``dict``. This module classifies those into the six
value kinds and normalizes decoder output that falls outside them.
"""

import math
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Mapping, Optional


class ValueKind(str, Enum):
    """Kinds of decoded values"""
    NULL = "null"
    BOOL = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Any) -> Optional[ValueKind]:
    """Classify a decoded value; returns None for objects outside the model."""
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass; check it first so True never counts as a number
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return None


def describe(value: Any) -> str:
    """Short human-readable name of a value's kind, for failure messages."""
    kind = kind_of(value)
    if kind is None:
        return type(value).__name__
    return kind.value


def is_integral(value: Any) -> bool:
    if kind_of(value) is not ValueKind.NUMBER:
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value) and float(value).is_integer()


def to_value(data: Any) -> Any:
    """
    Normalize decoder output into the value model.

    YAML resolves unquoted dates and timestamps to ``date``/``datetime``;
    those become ISO-8601 strings so they validate the same way as the
    equivalent JSON. Tuples become lists. Mapping keys must be strings.
    """
    if isinstance(data, (datetime, date, time)):
        return data.isoformat()
    if isinstance(data, Mapping):
        normalized = {}
        for key, item in data.items():
            if not isinstance(key, str):
                raise TypeError(f"mapping key {key!r} is not a string")
            normalized[key] = to_value(item)
        return normalized
    if isinstance(data, (list, tuple)):
        return [to_value(item) for item in data]
    if kind_of(data) is None:
        raise TypeError(f"unsupported value of type {type(data).__name__}")
    return data
