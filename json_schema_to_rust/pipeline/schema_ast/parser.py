"""
JSON Schema parser that builds Schema nodes.

Phase 1 of the pipeline: turn a decoded JSON Schema document into
Schema nodes without resolving references or doing any
language-specific processing.
"""

from __future__ import annotations

from typing import Any

from ..errors import SchemaParseError
from .nodes import Schema, SimpleType


class SchemaParser:
    """Parses a JSON Schema dictionary into a tree of Schema nodes."""

    # Keys holding reusable definitions, in lookup order
    DEFINITION_KEYS = ("definitions", "$defs")

    def parse(self, schema: dict[str, Any]) -> Schema:
        """
        Parse a JSON Schema document.

        Args:
            schema: The decoded JSON Schema dictionary

        Returns:
            The root Schema node, with nested definitions parsed
        """
        return self._parse_schema_node(schema, "#")

    def _parse_schema_node(self, schema: Any, path: str) -> Schema:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in schema (for error messages)

        Returns:
            The parsed Schema node
        """
        # `true` and `false` carry no structure; both become an untyped node
        if isinstance(schema, bool):
            return Schema(source_path=path)

        if not isinstance(schema, dict):
            raise SchemaParseError(f"Expected a schema object, got {type(schema).__name__}", path)

        node = Schema(source_path=path)

        if "$ref" in schema:
            ref = schema["$ref"]
            if not isinstance(ref, str):
                raise SchemaParseError("$ref must be a string", path)
            node.ref = ref

        if "type" in schema:
            node.type = self._parse_types(schema["type"], path)

        for prop_name, prop_schema in schema.get("properties", {}).items():
            node.properties[prop_name] = self._parse_schema_node(prop_schema, f"{path}/properties/{prop_name}")

        required = schema.get("required", [])
        if isinstance(required, list):
            node.required = [name for name in required if isinstance(name, str)]

        node.items = self._parse_items(schema.get("items"), path)

        if "additionalProperties" in schema:
            node.additional_properties = self._parse_additional_properties(schema["additionalProperties"], path)

        node.all_of = self._parse_schema_list(schema.get("allOf"), f"{path}/allOf")
        node.any_of = self._parse_schema_list(schema.get("anyOf"), f"{path}/anyOf")

        if "enum" in schema:
            if not isinstance(schema["enum"], list):
                raise SchemaParseError("enum must be an array", path)
            node.enum = list(schema["enum"])

        if "default" in schema:
            node.default = schema["default"]
            node.has_default = True

        description = schema.get("description")
        if isinstance(description, str):
            node.description = description

        for key in self.DEFINITION_KEYS:
            for name, def_schema in (schema.get(key) or {}).items():
                node.definitions[name] = self._parse_schema_node(def_schema, f"{path}/{key}/{name}")

        return node

    def _parse_types(self, type_value: Any, path: str) -> list[SimpleType]:
        """Parse `type`, which is either a single type name or a list of them."""
        names = type_value if isinstance(type_value, list) else [type_value]
        types = []
        for name in names:
            try:
                types.append(SimpleType(name))
            except ValueError:
                raise SchemaParseError(f"Unknown type {name!r}", path) from None
        return types

    def _parse_items(self, items_schema: Any, path: str) -> list[Schema]:
        """Parse `items`, normalizing a single schema to a one-element list."""
        if items_schema is None:
            return []
        if isinstance(items_schema, list):
            return [self._parse_schema_node(item, f"{path}/items/{i}") for i, item in enumerate(items_schema)]
        return [self._parse_schema_node(items_schema, f"{path}/items")]

    def _parse_additional_properties(self, value: Any, path: str) -> Schema | bool:
        """Parse `additionalProperties`, keeping the boolean form as-is."""
        if isinstance(value, bool):
            return value
        return self._parse_schema_node(value, f"{path}/additionalProperties")

    def _parse_schema_list(self, schemas: Any, path: str) -> list[Schema]:
        """Parse a list of sub-schemas (allOf / anyOf)."""
        if schemas is None:
            return []
        if not isinstance(schemas, list):
            raise SchemaParseError("Expected an array of schemas", path)
        return [self._parse_schema_node(s, f"{path}/{i}") for i, s in enumerate(schemas)]
