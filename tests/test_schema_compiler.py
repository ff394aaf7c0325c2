"""Schema compiler: structure, shorthand and structural errors"""

import dataclasses

import pytest

from rx_validate.validation import (
    SchemaError,
    SchemaNode,
    UnknownTypeError,
    compile_schema,
)


def test_compiles_nested_record(registry, aliases_schema_doc):
    node = compile_schema(aliases_schema_doc, registry)

    assert node.type == "record"
    assert list(node.required) == ["name", "start_date"]
    assert list(node.optional) == ["aliases"]
    aliases = node.optional["aliases"]
    assert aliases.type == "array"
    assert aliases.contents.type == "scalar-string"


def test_type_name_shorthand(registry):
    node = compile_schema("scalar-number", registry)
    assert node.type == "scalar-number"
    assert node.builtin


def test_default_registry_has_builtins():
    assert compile_schema({"type": "map", "contents": "any"}).contents.type == "any"


def test_custom_type_params_pass_through(registry):
    registry.register("tag:example.com,2024:rx/antler", lambda node, value, path: [])

    node = compile_schema({"type": "tag:example.com,2024:rx/antler", "points": 8}, registry)

    assert not node.builtin
    assert dict(node.params) == {"points": 8}


def test_compiled_nodes_are_immutable(registry, basic_schema_doc):
    node = compile_schema(basic_schema_doc, registry)

    with pytest.raises(dataclasses.FrozenInstanceError):
        node.type = "map"
    with pytest.raises(TypeError):
        node.required["extra"] = node


def test_compiled_tree_is_detached_from_document(registry, basic_schema_doc):
    node = compile_schema(basic_schema_doc, registry)
    basic_schema_doc["required"]["added"] = {"type": "scalar-string"}

    assert "added" not in node.required


class TestSchemaErrors:
    def test_missing_type(self, registry):
        with pytest.raises(SchemaError, match="missing 'type'"):
            compile_schema({"required": {}}, registry)

    def test_type_must_be_string(self, registry):
        with pytest.raises(SchemaError) as excinfo:
            compile_schema({"type": 5}, registry)
        assert excinfo.value.path == ("type",)

    def test_unknown_type_is_path_qualified(self, registry):
        doc = {"type": "record", "required": {"born": {"type": "reindeer-date"}}}

        with pytest.raises(UnknownTypeError) as excinfo:
            compile_schema(doc, registry)

        error = excinfo.value
        assert isinstance(error, SchemaError)
        assert error.identifier == "reindeer-date"
        assert error.path == ("required", "born", "type")
        assert str(error) == "$schema->{required}->{born}->{type}: unknown type 'reindeer-date'"

    def test_required_optional_overlap(self, registry):
        doc = {
            "type": "record",
            "required": {"name": "scalar-string"},
            "optional": {"name": "scalar-string"},
        }
        with pytest.raises(SchemaError, match="both required and optional: 'name'"):
            compile_schema(doc, registry)

    def test_first_nested_defect_wins(self, registry):
        doc = {
            "type": "array",
            "contents": {
                "type": "record",
                "required": {"a": {"type": "nope"}, "b": {}},
            },
        }
        with pytest.raises(SchemaError) as excinfo:
            compile_schema(doc, registry)
        assert excinfo.value.path == ("contents", "required", "a", "type")

    def test_unknown_parameter(self, registry):
        with pytest.raises(SchemaError) as excinfo:
            compile_schema({"type": "scalar-string", "contents": "any"}, registry)
        assert excinfo.value.path == ("contents",)

    @pytest.mark.parametrize("type_name", ["array", "map"])
    def test_collections_need_contents(self, registry, type_name):
        with pytest.raises(SchemaError, match="'contents' is required"):
            compile_schema({"type": type_name}, registry)

    def test_fields_must_be_mapping(self, registry):
        with pytest.raises(SchemaError, match="'required' must be a mapping"):
            compile_schema({"type": "record", "required": ["name"]}, registry)

    def test_schema_must_be_mapping_or_name(self, registry):
        with pytest.raises(SchemaError, match="got list"):
            compile_schema(["scalar-string"], registry)

    def test_one_of_needs_alternatives(self, registry):
        with pytest.raises(SchemaError, match="non-empty list"):
            compile_schema({"type": "one-of", "alternatives": []}, registry)

    def test_one_of_rejects_both_spellings(self, registry):
        with pytest.raises(SchemaError, match="not both"):
            compile_schema({"type": "one-of", "of": ["any"], "alternatives": ["any"]}, registry)

    def test_sequence_contents_must_be_list(self, registry):
        with pytest.raises(SchemaError):
            compile_schema({"type": "sequence", "contents": "scalar-string"}, registry)

    def test_value_must_match_type(self, registry):
        with pytest.raises(SchemaError, match="must be a number"):
            compile_schema({"type": "scalar-number", "value": "7"}, registry)

    def test_range_bounds_inverted(self, registry):
        with pytest.raises(SchemaError, match="lower bound"):
            compile_schema({"type": "scalar-number", "range": {"min": 5, "max": 1}}, registry)

    def test_range_rejects_min_and_min_ex(self, registry):
        with pytest.raises(SchemaError):
            compile_schema({"type": "integer", "range": {"min": 1, "min-ex": 0}}, registry)

    def test_length_must_be_non_negative_integer(self, registry):
        with pytest.raises(SchemaError, match="non-negative integer"):
            compile_schema({"type": "scalar-string", "length": {"min": -1}}, registry)


class TestPathologicalInputs:
    def test_self_referential_document(self, registry):
        doc = {"type": "array"}
        doc["contents"] = doc

        with pytest.raises(SchemaError, match="refers to itself") as excinfo:
            compile_schema(doc, registry)
        assert excinfo.value.path == ("contents",)

    def test_shared_subdocument_is_not_a_cycle(self, registry):
        name = {"type": "scalar-string"}
        doc = {"type": "record", "required": {"first": name, "last": name}}

        node = compile_schema(doc, registry)

        assert node.required["first"] == node.required["last"]

    def test_depth_limit(self, registry):
        doc = {"type": "scalar-string"}
        for _ in range(5):
            doc = {"type": "array", "contents": doc}

        with pytest.raises(SchemaError, match="deeper than 3"):
            compile_schema(doc, registry, max_depth=3)
        assert isinstance(compile_schema(doc, registry, max_depth=5), SchemaNode)


def test_node_defaults_are_fresh_read_only_mappings(registry):
    validator = registry.resolve("any")
    first = SchemaNode("any", validator)
    second = SchemaNode("any", validator)

    assert dict(first.required) == {} and dict(first.params) == {}
    assert first.params is not second.params
    with pytest.raises(TypeError):
        first.params["extra"] = 1


def test_explicit_zero_depth_only_allows_root(registry):
    assert compile_schema("scalar-string", registry, max_depth=0).type == "scalar-string"

    with pytest.raises(SchemaError, match="deeper than 0"):
        compile_schema({"type": "array", "contents": "any"}, registry, max_depth=0)


def test_interpreter_recursion_limit_reported_as_schema_error(registry):
    doc = {"type": "scalar-string"}
    for _ in range(2000):
        doc = {"type": "array", "contents": doc}

    with pytest.raises(SchemaError, match="recursion limit"):
        compile_schema(doc, registry, max_depth=5000)
