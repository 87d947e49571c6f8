"""
IR (Intermediate Representation) node definitions.

These nodes represent the expanded schema, ready for code generation.
Types are described structurally and rendered to Rust by the backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TypeKind(Enum):
    """Kind of type in the IR."""

    PRIMITIVE = "primitive"  # String, i64, f64, bool
    NAMED = "named"  # A declared struct, enum or alias
    ARRAY = "array"  # Vec<T>
    MAP = "map"  # BTreeMap<String, T>
    OPTIONAL = "optional"  # Option<T>
    BOXED = "boxed"  # Box<T>
    ONE_OR_MANY = "one_or_many"  # OneOrMany<T>
    ANY = "any"  # serde_json::Value


@dataclass
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.ANY
    name: str = ""  # Type name for PRIMITIVE and NAMED

    # For container types
    type_args: list[TypeRef] = field(default_factory=list)

    @property
    def inner(self) -> TypeRef:
        return self.type_args[0]

    @staticmethod
    def primitive(name: str) -> TypeRef:
        return TypeRef(kind=TypeKind.PRIMITIVE, name=name)

    @staticmethod
    def named(name: str) -> TypeRef:
        return TypeRef(kind=TypeKind.NAMED, name=name)

    @staticmethod
    def any() -> TypeRef:
        return TypeRef(kind=TypeKind.ANY)

    @staticmethod
    def wrap(kind: TypeKind, inner: TypeRef) -> TypeRef:
        return TypeRef(kind=kind, type_args=[inner])


@dataclass
class FieldType:
    """The type inferred for one schema fragment.

    `default` is set when the type has an empty value of its own, so an
    absent field can be filled in without wrapping the type in Option.
    """

    type_ref: TypeRef = field(default_factory=TypeRef.any)
    default: bool = False


@dataclass
class FieldDef:
    """A field of a struct."""

    name: str = ""  # Rust identifier
    original_name: str = ""  # Original JSON property name
    type_ref: TypeRef = field(default_factory=TypeRef.any)
    has_default: bool = False  # Emit #[serde(default)]
    rename: str | None = None
    description: str | None = None


@dataclass
class StructDef:
    """A struct declaration."""

    name: str = ""
    original_name: str = ""
    fields: list[FieldDef] = field(default_factory=list)
    # Every field is optional, so the struct can derive Default
    is_default: bool = False
    rename: str | None = None
    description: str | None = None


@dataclass
class VariantDef:
    """A unit variant of an enum."""

    name: str = ""
    rename: str | None = None


@dataclass
class EnumDef:
    """An enum declaration over string literals."""

    name: str = ""
    original_name: str = ""
    variants: list[VariantDef] = field(default_factory=list)
    rename: str | None = None
    description: str | None = None


@dataclass
class TypeAlias:
    """A `pub type` alias declaration."""

    name: str = ""
    original_name: str = ""
    target_type: TypeRef = field(default_factory=TypeRef.any)
    description: str | None = None


Declaration = StructDef | EnumDef | TypeAlias


@dataclass
class IR:
    """The complete Intermediate Representation."""

    root_name: str | None = None

    # All declarations in discovery order: definitions first, then the root
    declarations: list[Declaration] = field(default_factory=list)

    # Whether any field uses the OneOrMany helper type
    needs_one_or_many: bool = False

    def get(self, name: str) -> Declaration | None:
        """Get the first declaration with the given Rust name."""
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None
