import pytest

from json_schema_to_rust.pipeline.analyzer.reference_resolver import ReferenceResolver
from json_schema_to_rust.pipeline.errors import MissingRootNameError, UnresolvedReferenceError
from json_schema_to_rust.pipeline.schema_ast import SchemaParser


@pytest.fixture
def root():
    return SchemaParser().parse(
        {
            "definitions": {
                "address": {"type": "object", "properties": {"street": {"type": "string"}}},
                "namespace": {
                    "definitions": {"inner": {"type": "integer"}},
                },
            },
            "$defs": {"modern": {"type": "boolean"}},
            "properties": {"home": {"$ref": "#/definitions/address"}},
        }
    )


def test_resolve_definition(root):
    resolver = ReferenceResolver(root)
    assert resolver.resolve("#/definitions/address") is root.definitions["address"]


def test_resolve_root(root):
    assert ReferenceResolver(root).resolve("#") is root


def test_resolve_nested_definitions(root):
    resolver = ReferenceResolver(root)
    inner = root.definitions["namespace"].definitions["inner"]
    assert resolver.resolve("#/definitions/namespace/definitions/inner") is inner


def test_resolve_defs_segment(root):
    assert ReferenceResolver(root).resolve("#/$defs/modern") is root.definitions["modern"]


def test_hash_segment_jumps_back_to_root(root):
    resolver = ReferenceResolver(root)
    assert resolver.resolve("#/definitions/namespace/#/definitions/address") is root.definitions["address"]


def test_unresolved_reference(root):
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        ReferenceResolver(root).resolve("#/definitions/missing")
    assert exc_info.value.segment == "missing"
    assert exc_info.value.ref == "#/definitions/missing"


def test_type_name_uses_last_segment(root):
    assert ReferenceResolver(root).type_name("#/definitions/address") == "Address"


def test_type_name_for_root(root):
    assert ReferenceResolver(root, "my_schema").type_name("#") == "MySchema"


def test_type_name_for_root_without_root_name(root):
    with pytest.raises(MissingRootNameError):
        ReferenceResolver(root).type_name("#")
