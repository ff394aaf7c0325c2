"""
Built-in type validators.

Each validator has the same signature as a custom type:
``(node, value, path) -> list of Failure``. Structural types recurse
through the child nodes the compiler attached; scalar types check the
value kind and then any value constraints (``value``, ``length``,
``range``) carried in ``node.params``.
"""

from typing import Any, Dict, List

from .schema import SchemaNode, ValidatorFn
from .types import DataPath, Failure
from .values import ValueKind, describe, is_integral, kind_of

RECORD = "record"
ARRAY = "array"
MAP = "map"
SEQUENCE = "sequence"
SCALAR_STRING = "scalar-string"
SCALAR_NUMBER = "scalar-number"
SCALAR_BOOL = "scalar-bool"
INTEGER = "integer"
NIL = "nil"
ANY = "any"
ONE_OF = "one-of"


def _kind_mismatch(node: SchemaNode, value: Any, path: DataPath, expected: str) -> Failure:
    return Failure.type_mismatch(path, node.type, f"expected {expected}, got {describe(value)}")


# ============================================================================
# Value constraints
# ============================================================================

def _check_exact(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if "value" in node.params and value != node.params["value"]:
        return [Failure.value_invalid(
            path, node.type, f"expected value {node.params['value']!r}, got {value!r}"
        )]
    return []


def _check_range(node: SchemaNode, number: Any, path: DataPath) -> List[Failure]:
    bounds = node.params.get("range")
    if not bounds:
        return []

    problems = []
    if "min" in bounds and number < bounds["min"]:
        problems.append(f"less than minimum {bounds['min']}")
    if "min-ex" in bounds and number <= bounds["min-ex"]:
        problems.append(f"not greater than {bounds['min-ex']}")
    if "max" in bounds and number > bounds["max"]:
        problems.append(f"greater than maximum {bounds['max']}")
    if "max-ex" in bounds and number >= bounds["max-ex"]:
        problems.append(f"not less than {bounds['max-ex']}")

    return [Failure.value_invalid(path, node.type, f"{number!r} is {problem}") for problem in problems]


def _check_length(node: SchemaNode, size: int, path: DataPath, unit: str) -> List[Failure]:
    bounds = node.params.get("length")
    if not bounds:
        return []
    if "min" in bounds and size < bounds["min"]:
        return [Failure.value_invalid(
            path, node.type, f"{unit} count {size} is less than minimum {bounds['min']}"
        )]
    if "max" in bounds and size > bounds["max"]:
        return [Failure.value_invalid(
            path, node.type, f"{unit} count {size} is greater than maximum {bounds['max']}"
        )]
    return []


# ============================================================================
# Scalars
# ============================================================================

def validate_string(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if kind_of(value) is not ValueKind.STRING:
        return [_kind_mismatch(node, value, path, "string")]
    return _check_exact(node, value, path) + _check_length(node, len(value), path, "character")


def validate_number(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if kind_of(value) is not ValueKind.NUMBER:
        return [_kind_mismatch(node, value, path, "number")]
    return _check_exact(node, value, path) + _check_range(node, value, path)


def validate_integer(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if not is_integral(value):
        return [_kind_mismatch(node, value, path, "integer")]
    return _check_exact(node, value, path) + _check_range(node, value, path)


def validate_bool(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if kind_of(value) is not ValueKind.BOOL:
        return [_kind_mismatch(node, value, path, "boolean")]
    return _check_exact(node, value, path)


def validate_nil(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if value is not None:
        return [_kind_mismatch(node, value, path, "null")]
    return []


def validate_any(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    return []


# ============================================================================
# Structures
# ============================================================================

def validate_record(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    """
    Check a mapping against declared required and optional fields.

    Order of failures: keys the schema does not declare (in the value's own
    key order), then absent required keys (declaration order), then the
    failures of each present field (required then optional, declaration
    order), then any keys covered by ``rest``.
    """
    if kind_of(value) is not ValueKind.MAPPING:
        return [_kind_mismatch(node, value, path, "mapping")]

    failures: List[Failure] = []
    declared = node.fields()
    extra = [key for key in value if key not in declared]

    if node.rest is None:
        for key in extra:
            failures.append(Failure.unexpected(path, node.type, f"unexpected key '{key}'"))

    for key in node.required:
        if key not in value:
            failures.append(Failure.missing(path, node.type, f"missing required key '{key}'"))

    for key, child in declared.items():
        if key in value:
            failures.extend(child.check(value[key], path.key(key)))

    if node.rest is not None:
        for key in extra:
            failures.extend(node.rest.check(value[key], path.key(key)))

    return failures


def validate_array(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if kind_of(value) is not ValueKind.SEQUENCE:
        return [_kind_mismatch(node, value, path, "sequence")]

    failures = _check_length(node, len(value), path, "entry")
    for position, item in enumerate(value):
        failures.extend(node.contents.check(item, path.index(position)))
    return failures


def validate_map(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    if kind_of(value) is not ValueKind.MAPPING:
        return [_kind_mismatch(node, value, path, "mapping")]

    failures: List[Failure] = []
    for key, item in value.items():
        failures.extend(node.contents.check(item, path.key(key)))
    return failures


def validate_sequence(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    """Positional entries, each with its own type, plus an optional tail type"""
    if kind_of(value) is not ValueKind.SEQUENCE:
        return [_kind_mismatch(node, value, path, "sequence")]

    failures: List[Failure] = []
    for position, child in enumerate(node.items):
        if position >= len(value):
            failures.append(Failure.missing(
                path, node.type, f"missing entry [{position}] of type {child.type}"
            ))
        else:
            failures.extend(child.check(value[position], path.index(position)))

    for position in range(len(node.items), len(value)):
        if node.tail is None:
            failures.append(Failure.unexpected(path, node.type, f"unexpected entry [{position}]"))
        else:
            failures.extend(node.tail.check(value[position], path.index(position)))

    return failures


def validate_one_of(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
    """
    Accept the value if any alternative accepts it.

    Failures from individual alternatives are discarded; a value matching
    none of them yields a single failure naming every alternative.
    """
    for alternative in node.alternatives:
        if not alternative.check(value, path):
            return []

    names = ", ".join(alternative.type for alternative in node.alternatives)
    return [Failure.type_mismatch(
        path, node.type, f"{describe(value)} value matched none of: {names}"
    )]


BUILTIN_VALIDATORS: Dict[str, ValidatorFn] = {
    RECORD: validate_record,
    ARRAY: validate_array,
    MAP: validate_map,
    SEQUENCE: validate_sequence,
    SCALAR_STRING: validate_string,
    SCALAR_NUMBER: validate_number,
    SCALAR_BOOL: validate_bool,
    INTEGER: validate_integer,
    NIL: validate_nil,
    ANY: validate_any,
    ONE_OF: validate_one_of,
}

# Schema document keys each built-in accepts besides ``type``
BUILTIN_KEYS: Dict[str, frozenset] = {
    RECORD: frozenset({"required", "optional", "rest"}),
    ARRAY: frozenset({"contents", "length"}),
    MAP: frozenset({"contents"}),
    SEQUENCE: frozenset({"contents", "tail"}),
    SCALAR_STRING: frozenset({"value", "length"}),
    SCALAR_NUMBER: frozenset({"value", "range"}),
    SCALAR_BOOL: frozenset({"value"}),
    INTEGER: frozenset({"value", "range"}),
    NIL: frozenset(),
    ANY: frozenset(),
    ONE_OF: frozenset({"alternatives", "of"}),
}
