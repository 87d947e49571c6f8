"""
Identifier policy for generated Rust code.

Converts schema keys to legal Rust identifiers and decides when the
serialized name must be kept with a `#[serde(rename = "...")]` attribute.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...utils import to_pascal_case, to_snake_case

# Rust keywords (strict and reserved) that cannot be used as identifiers
RUST_RESERVED_KEYWORDS = {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "crate",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "gen",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
}

_ILLEGAL_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class Identifier:
    """A Rust identifier and the serialized name it maps to, if different."""

    name: str
    rename: str | None = None


def to_type_name(raw: str) -> str:
    """
    Convert a schema key or ref tail to a Rust type name.

    Examples:
        "positiveInteger" -> PositiveInteger
        "3dPoint" -> T3DPoint
        "self" -> Self_
        "$" -> Unnamed
    """
    name = to_pascal_case(raw)
    if not name:
        name = "Unnamed"
    elif name[0].isdigit():
        name = f"T{name}"

    reserved = rename_if_reserved_word(name)
    if reserved:
        name = reserved.name
    return name


def unique_name(name: str, used: set[str], separator: str = "_") -> str:
    """Suffix `name` with the first free counter (2, 3, ...) if it is already in `used`."""
    if name not in used:
        return name
    counter = 2
    while f"{name}{separator}{counter}" in used:
        counter += 1
    return f"{name}{separator}{counter}"


def rename_if_reserved_word(candidate: str) -> Identifier | None:
    """
    Suffix a reserved word with an underscore.

    Returns:
        An Identifier renamed back to `candidate`, or None when `candidate`
        can be used unchanged
    """
    if candidate in RUST_RESERVED_KEYWORDS:
        return Identifier(name=f"{candidate}_", rename=candidate)
    return None


def to_field_name(raw: str) -> Identifier:
    """
    Convert a property key to a snake_case field identifier.

    Examples:
        "type" -> type_ renamed "type"
        "$ref" -> ref_ renamed "$ref"
        "sourceReference" -> source_reference renamed "sourceReference"
        "name" -> name
    """
    reserved = rename_if_reserved_word(raw)
    if reserved:
        return reserved

    name = _ILLEGAL_IDENTIFIER_CHARS.sub("", to_snake_case(raw))
    if not name:
        name = "field"
    elif name[0].isdigit():
        name = f"_{name}"

    reserved = rename_if_reserved_word(name)
    if reserved:
        name = reserved.name

    if name == raw:
        return Identifier(name=name)
    return Identifier(name=name, rename=raw)


def to_variant_name(value: str) -> Identifier:
    """Convert a string enum literal to a PascalCase variant identifier."""
    pascal = to_pascal_case(value)
    if not pascal:
        pascal = "Empty"
    elif pascal[0].isdigit():
        pascal = f"V{pascal}"

    reserved = rename_if_reserved_word(pascal)
    if reserved:
        pascal = reserved.name

    if pascal == value:
        return Identifier(name=pascal)
    return Identifier(name=pascal, rename=value)
