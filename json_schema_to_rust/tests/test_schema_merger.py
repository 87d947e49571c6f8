import copy

from json_schema_to_rust.pipeline.analyzer.schema_merger import merge_all_of
from json_schema_to_rust.pipeline.schema_ast import SchemaParser, SimpleType


def parse(schema):
    return SchemaParser().parse(schema)


def test_required_is_union():
    target = parse({"required": ["a"]})
    merge_all_of(target, parse({"required": ["b", "a"]}))
    assert target.required == ["a", "b"]


def test_type_is_intersection():
    target = parse({"type": ["string"]})
    merge_all_of(target, parse({"type": ["string", "integer"]}))
    assert target.type == [SimpleType.STRING]


def test_type_without_source_type_is_emptied():
    target = parse({"type": "integer"})
    merge_all_of(target, parse({"default": 0}))
    assert target.type == []


def test_ref_and_description_last_writer_wins():
    target = parse({"$ref": "#/definitions/a", "description": "first"})
    merge_all_of(target, parse({"$ref": "#/definitions/b", "description": "second"}))
    assert target.ref == "#/definitions/b"
    assert target.description == "second"


def test_ref_and_description_kept_when_source_has_none():
    target = parse({"$ref": "#/definitions/a", "description": "first"})
    merge_all_of(target, parse({}))
    assert target.ref == "#/definitions/a"
    assert target.description == "first"


def test_new_properties_are_appended():
    target = parse({"properties": {"a": {"type": "string"}}})
    merge_all_of(target, parse({"properties": {"b": {"type": "integer"}}}))
    assert list(target.properties) == ["a", "b"]


def test_shared_properties_are_merged_recursively():
    target = parse({"properties": {"arguments": {"type": ["object", "string"], "description": "args"}}})
    merge_all_of(target, parse({"properties": {"arguments": {"$ref": "#/definitions/Args"}}}))
    arguments = target.properties["arguments"]
    assert arguments.ref == "#/definitions/Args"
    assert arguments.description == "args"
    assert arguments.type == []


def test_source_is_never_mutated():
    first = parse({"properties": {"inner": {"properties": {"x": {"type": "string"}}}}})
    second = parse({"properties": {"inner": {"properties": {"y": {"type": "string"}}}}})
    first_before = copy.deepcopy(first)

    target = parse({})
    merge_all_of(target, first)
    merge_all_of(target, second)

    assert list(target.properties["inner"].properties) == ["x", "y"]
    assert first == first_before
