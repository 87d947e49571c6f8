"""
Schema node definitions for JSON Schema.

A single node type mirrors the subset of JSON Schema keywords the
generator understands. References are stored as-is: a node never
follows its own `ref`, resolution is done by the analyzer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SimpleType(str, Enum):
    """The JSON Schema primitive type names."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NULL = "null"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"


@dataclass
class Schema:
    """One JSON-Schema-shaped unit of the input document."""

    ref: str | None = None
    type: list[SimpleType] = field(default_factory=list)

    # Insertion ordered: document order is emission order
    properties: dict[str, Schema] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    items: list[Schema] = field(default_factory=list)

    # A Schema, or a bare boolean as allowed by JSON Schema, or None when absent
    additional_properties: Schema | bool | None = None

    all_of: list[Schema] = field(default_factory=list)
    any_of: list[Schema] = field(default_factory=list)

    # None means the keyword is absent; an empty list is a meaningful value
    enum: list[Any] | None = None

    default: Any = None
    has_default: bool = False

    description: str | None = None

    definitions: dict[str, Schema] = field(default_factory=dict)

    # Source location in the document (for error messages); not part of equality
    source_path: str = field(default="#", compare=False, repr=False)

    def is_required(self, name: str) -> bool:
        """Check whether a property name is listed in `required`."""
        return name in self.required
