"""Type registry: built-ins, custom registration and collision policy"""

import pytest

from rx_validate.config import settings
from rx_validate.validation import (
    DuplicateTypeError,
    TypeRegistry,
    UnknownTypeError,
    compile_schema,
    learn_type,
    validate,
)
from rx_validate.validation.builtins import BUILTIN_VALIDATORS


def accept_all(node, value, path):
    return []


def test_builtins_registered_at_construction(registry):
    for identifier in ("record", "array", "map", "sequence", "scalar-string",
                       "scalar-number", "scalar-bool", "any", "one-of"):
        assert identifier in registry
        assert registry.is_builtin(identifier)
    assert len(registry) == len(BUILTIN_VALIDATORS)


def test_register_and_resolve_custom_type(registry):
    registry.register("tag:example.com,2024:rx/harness", accept_all)

    assert registry.resolve("tag:example.com,2024:rx/harness") is accept_all
    assert not registry.is_builtin("tag:example.com,2024:rx/harness")
    assert registry.identifiers(include_builtins=False) == ["tag:example.com,2024:rx/harness"]


def test_decorator_registration(registry):
    @registry.type("sleigh-bell")
    def validate_bell(node, value, path):
        return []

    assert registry.resolve("sleigh-bell") is validate_bell


def test_builtin_collision_always_rejected():
    registry = TypeRegistry(allow_shadowing=True)

    with pytest.raises(DuplicateTypeError) as excinfo:
        registry.register("record", accept_all)

    assert excinfo.value.builtin
    assert excinfo.value.identifier == "record"


def test_custom_collision_rejected_by_default(registry):
    registry.register("reindeer-date", accept_all)

    with pytest.raises(DuplicateTypeError) as excinfo:
        registry.register("reindeer-date", accept_all)
    assert not excinfo.value.builtin


def test_custom_shadowing_when_allowed():
    def reject_all(node, value, path):
        return ["nope"]

    registry = TypeRegistry(allow_shadowing=True)
    registry.register("reindeer-date", accept_all)
    registry.register("reindeer-date", reject_all)

    assert registry.resolve("reindeer-date") is reject_all


def test_shadowing_default_comes_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "allow_custom_shadowing", True)
    assert TypeRegistry().allow_shadowing is True


def test_resolve_unknown_type(registry):
    with pytest.raises(UnknownTypeError, match="unknown type 'moose'"):
        registry.resolve("moose")


def test_register_rejects_non_callable(registry):
    with pytest.raises(TypeError):
        registry.register("broken", "not a function")


def test_learned_type_is_reusable(registry):
    learn_type(registry, "reindeer", {
        "type": "record",
        "required": {"name": "scalar-string"},
    })
    schema = compile_schema({"type": "array", "contents": "reindeer"}, registry)

    result = validate(schema, [{"name": "Comet"}, {"nam": "Cupid"}])

    assert [f.render() for f in result.failures] == [
        "$data->[1] failed record: unexpected key 'nam'",
        "$data->[1] failed record: missing required key 'name'",
    ]
