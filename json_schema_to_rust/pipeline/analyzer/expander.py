"""
Schema expander that turns Schema nodes into IR declarations.

Phase 2 of the pipeline: resolve references, merge allOf compositions,
infer a Rust type for every schema fragment and collect the named
declarations to emit.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from ..config import CodeGeneratorConfig
from ..errors import CyclicReferenceError, UnsupportedEnumValueError
from ..schema_ast.nodes import Schema, SimpleType
from .cycles import break_reference_cycles, check_alias_cycles
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
from .naming import to_field_name, to_type_name, to_variant_name, unique_name
from .reference_resolver import ReferenceResolver
from .schema_merger import merge_all_of

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = {
    SimpleType.STRING: "String",
    SimpleType.INTEGER: "i64",
    SimpleType.NUMBER: "f64",
    SimpleType.BOOLEAN: "bool",
}


@dataclass
class ExpansionContext:
    """State accumulated during one expansion pass."""

    resolver: ReferenceResolver

    # Set as soon as any field uses the one-or-many pattern
    needs_one_or_many: bool = False

    declarations: list[Declaration] = field(default_factory=list)


class SchemaExpander:
    """Expands a schema document into IR declarations.

    The expander itself holds no per-run state; everything a run
    accumulates lives in the ExpansionContext passed down the calls.
    """

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the expander.

        Args:
            config: Code generation configuration
        """
        self.config = config or CodeGeneratorConfig()

    def expand(self, root: Schema, root_name: str | None = None) -> IR:
        """
        Expand every definition, then the root itself when it is named.

        Args:
            root: The parsed document root
            root_name: Name of the root type, or None to emit only definitions

        Returns:
            IR with declarations in discovery order

        Raises:
            RecursiveAliasError: If type aliases refer to each other in a loop
        """
        ctx = ExpansionContext(resolver=ReferenceResolver(root, root_name))

        ctx.declarations.extend(self.expand_definitions(ctx, root))
        if root_name is not None:
            ctx.declarations.append(self.expand_schema(ctx, root_name, root))

        check_alias_cycles(ctx.declarations)
        if self.config.break_reference_cycles:
            break_reference_cycles(ctx.declarations)

        return IR(
            root_name=root_name,
            declarations=ctx.declarations,
            needs_one_or_many=ctx.needs_one_or_many,
        )

    def expand_definitions(self, ctx: ExpansionContext, schema: Schema) -> list[Declaration]:
        """Expand each entry of `schema.definitions` in document order."""
        declarations = []
        for name, definition in schema.definitions.items():
            declaration = self.expand_schema(ctx, name, definition)
            declaration.description = definition.description
            declarations.append(declaration)
        return declarations

    def expand_schema(self, ctx: ExpansionContext, original_name: str, schema: Schema) -> Declaration:
        """
        Expand one named schema into a struct, an enum or a type alias.

        A schema with properties (after resolution) becomes a struct, a
        schema with a non-empty enum becomes an enum, anything else is an
        alias to its inferred type.
        """
        name = to_type_name(original_name)
        rename = original_name if original_name != name else None
        fields, is_default = self.expand_fields(ctx, name, schema)

        if fields:
            declaration = StructDef(
                name=name,
                original_name=original_name,
                fields=fields,
                is_default=is_default,
                rename=rename,
            )
        elif schema.enum:
            declaration = EnumDef(
                name=name,
                original_name=original_name,
                variants=self._expand_variants(name, schema.enum),
                rename=rename,
            )
        else:
            declaration = TypeAlias(
                name=name,
                original_name=original_name,
                target_type=self.expand_type(ctx, "", True, schema).type_ref,
            )

        logger.debug("Expanded %s into %s", original_name, type(declaration).__name__)
        return declaration

    def _expand_variants(self, enum_name: str, values: list) -> list[VariantDef]:
        variants = []
        used: set[str] = set()
        for value in values:
            if not isinstance(value, str):
                raise UnsupportedEnumValueError(enum_name, value)
            identifier = to_variant_name(value)
            variant_name = unique_name(identifier.name, used, separator="")
            used.add(variant_name)
            if variant_name != identifier.name:
                logger.debug("Variant %r of %s renamed to %s", value, enum_name, variant_name)
            variant_rename = identifier.rename if variant_name == identifier.name else value
            variants.append(VariantDef(name=variant_name, rename=variant_rename))
        return variants

    def expand_fields(self, ctx: ExpansionContext, type_name: str, schema: Schema) -> tuple[list[FieldDef], bool]:
        """
        Expand the properties of `schema` into struct fields.

        Returns:
            The fields, and whether every field ended up optional
        """
        schema = self.resolve(ctx, schema)
        fields = []
        used: set[str] = set()
        all_optional = True
        for field_name, value in schema.properties.items():
            identifier = to_field_name(field_name)
            name = unique_name(identifier.name, used)
            used.add(name)
            if name != identifier.name:
                logger.debug("Field %r of %s renamed to %s", field_name, type_name, name)
            field_type = self.expand_type(ctx, type_name, schema.is_required(field_name), value)
            if field_type.type_ref.kind is not TypeKind.OPTIONAL:
                all_optional = False
            fields.append(
                FieldDef(
                    name=name,
                    original_name=field_name,
                    type_ref=field_type.type_ref,
                    has_default=field_type.default,
                    rename=identifier.rename if name == identifier.name else field_name,
                    description=value.description,
                )
            )
        return fields, all_optional

    def expand_type(self, ctx: ExpansionContext, type_name: str, required: bool, schema: Schema) -> FieldType:
        """
        Infer the type of a field of the declaration named `type_name`.

        A direct reference to the enclosing declaration is boxed, and a
        field that is neither required nor defaultable is wrapped in Option.
        """
        result = self._expand_type_inner(ctx, schema)
        if result.type_ref.kind is TypeKind.NAMED and result.type_ref.name == type_name:
            result.type_ref = TypeRef.wrap(TypeKind.BOXED, result.type_ref)
        if not required and not result.default:
            result.type_ref = TypeRef.wrap(TypeKind.OPTIONAL, result.type_ref)
        return result

    def _expand_type_inner(self, ctx: ExpansionContext, schema: Schema) -> FieldType:
        if schema.ref is not None:
            return FieldType(type_ref=TypeRef.named(ctx.resolver.type_name(schema.ref)))

        if len(schema.any_of) == 2:
            if self._is_one_or_many(ctx, schema):
                ctx.needs_one_or_many = True
                item = self._expand_type_inner(ctx, schema.any_of[0])
                logger.debug("Detected one-or-many pattern at %s", schema.source_path)
                return FieldType(type_ref=TypeRef.wrap(TypeKind.ONE_OR_MANY, item.type_ref), default=True)
            return FieldType(type_ref=TypeRef.any())

        if len(schema.type) != 1:
            return FieldType(type_ref=TypeRef.any())

        match schema.type[0]:
            case SimpleType.STRING if schema.enum == []:
                # An empty enum accepts any string-shaped value
                return FieldType(type_ref=TypeRef.any())
            case SimpleType.STRING | SimpleType.INTEGER | SimpleType.NUMBER | SimpleType.BOOLEAN:
                return FieldType(type_ref=TypeRef.primitive(PRIMITIVE_TYPES[schema.type[0]]))
            case SimpleType.OBJECT if schema.additional_properties not in (None, False):
                if schema.additional_properties is True:
                    value_type = TypeRef.any()
                else:
                    value_type = self._expand_type_inner(ctx, schema.additional_properties).type_ref
                has_empty_default = schema.has_default and schema.default == {}
                return FieldType(type_ref=TypeRef.wrap(TypeKind.MAP, value_type), default=has_empty_default)
            case SimpleType.ARRAY:
                if schema.items:
                    item_type = self._expand_type_inner(ctx, schema.items[0]).type_ref
                else:
                    item_type = TypeRef.any()
                return FieldType(type_ref=TypeRef.wrap(TypeKind.ARRAY, item_type))
            case _:
                return FieldType(type_ref=TypeRef.any())

    def _is_one_or_many(self, ctx: ExpansionContext, schema: Schema) -> bool:
        """Check for `anyOf: [X, {type: array, items: X}]`."""
        single = self.resolve(ctx, schema.any_of[0])
        array = self.resolve(ctx, schema.any_of[1])
        if not array.type or array.type[0] is not SimpleType.ARRAY or not array.items:
            return False
        return single == self.resolve(ctx, array.items[0])

    def resolve(self, ctx: ExpansionContext, schema: Schema) -> Schema:
        """
        Follow `schema.ref` and fold `all_of` into a single schema.

        The returned schema is either a node of the document, or a fresh
        copy when a merge took place; document nodes are never mutated.

        Raises:
            UnresolvedReferenceError: If a reference cannot be found
            CyclicReferenceError: If an allOf chain leads back to itself
        """
        resolved, _ = self._resolve(ctx, schema, ())
        return resolved

    def _resolve(self, ctx: ExpansionContext, schema: Schema, seen: tuple[str, ...]) -> tuple[Schema, bool]:
        """Resolve `schema`, returning it together with an "is a private copy" flag."""
        if schema.ref is not None:
            if schema.ref in seen:
                raise CyclicReferenceError([*seen, schema.ref])
            seen = (*seen, schema.ref)
            schema = ctx.resolver.resolve(schema.ref)

        if not schema.all_of:
            return schema, False

        merged, owned = self._resolve(ctx, schema.all_of[0], seen)
        if not owned:
            merged = copy.deepcopy(merged)
        for component in schema.all_of[1:]:
            resolved, _ = self._resolve(ctx, component, seen)
            merge_all_of(merged, resolved)
        return merged, True
