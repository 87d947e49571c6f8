"""
Rust code generation backend.

Renders IR declarations as serde-annotated Rust structs, enums and
type aliases.
"""

from __future__ import annotations

import logging
from typing import Any

from ... import __version__
from ..analyzer.ir_nodes import IR, Declaration, EnumDef, StructDef, TypeAlias, TypeKind, TypeRef
from .base import CodeBackend

logger = logging.getLogger(__name__)

# Derives that close every derive list, in this order
SERDE_DERIVES = ["Deserialize", "Serialize"]

_RUST_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def rust_string_literal(value: str) -> str:
    """Quote `value` as a Rust string literal."""
    return '"' + "".join(_RUST_STRING_ESCAPES.get(c, c) for c in value) + '"'


class RustBackend(CodeBackend):
    """Rust code generation backend."""

    TEMPLATE_LANG = "rust"
    FILE_EXTENSION = "rs"

    ANY_TYPE = "serde_json::Value"

    def _setup_templates(self) -> None:
        super()._setup_templates()
        self.jinja_env.filters["rust_str"] = rust_string_literal

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.struct_template = self.jinja_env.get_template(f"struct.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")
        self.alias_template = self.jinja_env.get_template(f"alias.{self.FILE_EXTENSION}.jinja2")

    def generate(self, ir: IR) -> str:
        """Generate Rust code from IR."""
        sections = []

        generation_comment = None
        if self.config.add_generation_comment:
            generation_comment = f"This file was generated by json_schema_to_rust {__version__}. Do not edit by hand."

        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            serde_imports=self.config.add_serde_imports,
            one_or_many=ir.needs_one_or_many,
        ).strip()
        if prefix:
            sections.append(prefix)

        for declaration in ir.declarations:
            sections.append(self.render_declaration(declaration))

        logger.debug("Rendered %d declarations", len(ir.declarations))
        return "\n\n".join(sections) + "\n"

    def render_declaration(self, declaration: Declaration) -> str:
        """Render a single struct, enum or type alias."""
        if isinstance(declaration, StructDef):
            return self.struct_template.render(self._prepare_struct_context(declaration))
        if isinstance(declaration, EnumDef):
            return self.enum_template.render(self._prepare_enum_context(declaration))
        if isinstance(declaration, TypeAlias):
            return self.alias_template.render(
                name=declaration.name,
                target=self.translate_type(declaration.target_type),
                doc=self._doc_comment(declaration.description),
            )
        raise ValueError(f"Unknown declaration {declaration!r}")

    def _prepare_struct_context(self, struct_def: StructDef) -> dict[str, Any]:
        fields = []
        for field_def in struct_def.fields:
            fields.append(
                {
                    "name": field_def.name,
                    "type": self.translate_type(field_def.type_ref),
                    "has_default": field_def.has_default,
                    "rename": field_def.rename,
                    "doc": self._doc_comment(field_def.description, self.INDENT),
                }
            )
        extra = ["Default"] if struct_def.is_default else []
        return {
            "name": struct_def.name,
            "derives": self._derives(extra),
            "rename": struct_def.rename,
            "doc": self._doc_comment(struct_def.description),
            "fields": fields,
            "indent": self.INDENT,
        }

    def _prepare_enum_context(self, enum_def: EnumDef) -> dict[str, Any]:
        return {
            "name": enum_def.name,
            "derives": self._derives([]),
            "rename": enum_def.rename,
            "doc": self._doc_comment(enum_def.description),
            "variants": enum_def.variants,
            "indent": self.INDENT,
        }

    def _derives(self, extra: list[str]) -> list[str]:
        """Configured derives, then `extra`, then the serde derives, without repeats."""
        return list(dict.fromkeys([*self.config.derives, *extra, *SERDE_DERIVES]))

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate an IR type to its Rust spelling."""
        match type_ref.kind:
            case TypeKind.PRIMITIVE | TypeKind.NAMED:
                return type_ref.name
            case TypeKind.ARRAY:
                return f"Vec<{self.translate_type(type_ref.inner)}>"
            case TypeKind.MAP:
                return f"{self.config.map_type}<String, {self.translate_type(type_ref.inner)}>"
            case TypeKind.OPTIONAL:
                return f"Option<{self.translate_type(type_ref.inner)}>"
            case TypeKind.BOXED:
                return f"Box<{self.translate_type(type_ref.inner)}>"
            case TypeKind.ONE_OR_MANY:
                return f"OneOrMany<{self.translate_type(type_ref.inner)}>"
            case _:
                return self.ANY_TYPE
