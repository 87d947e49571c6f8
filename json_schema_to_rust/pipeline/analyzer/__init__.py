"""
Analyzer module.

Contains identifier policy, reference resolution, allOf merging and
type expansion into IR.
"""

from __future__ import annotations

from .cycles import break_reference_cycles, check_alias_cycles
from .expander import ExpansionContext, SchemaExpander
from .ir_nodes import (
    IR,
    Declaration,
    EnumDef,
    FieldDef,
    FieldType,
    StructDef,
    TypeAlias,
    TypeKind,
    TypeRef,
    VariantDef,
)
from .naming import Identifier, rename_if_reserved_word, to_field_name, to_type_name, to_variant_name, unique_name
from .reference_resolver import ReferenceResolver
from .schema_merger import merge_all_of

__all__ = [
    "IR",
    "Declaration",
    "StructDef",
    "EnumDef",
    "VariantDef",
    "TypeAlias",
    "FieldDef",
    "FieldType",
    "TypeRef",
    "TypeKind",
    "Identifier",
    "to_type_name",
    "to_field_name",
    "to_variant_name",
    "rename_if_reserved_word",
    "unique_name",
    "ReferenceResolver",
    "merge_all_of",
    "break_reference_cycles",
    "check_alias_cycles",
    "ExpansionContext",
    "SchemaExpander",
]
