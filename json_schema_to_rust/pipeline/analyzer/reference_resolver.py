"""
Reference resolver for $ref resolution.

Resolves $ref paths to their target Schema nodes and to the Rust type
names those targets are declared under.
"""

from __future__ import annotations

from ..errors import MissingRootNameError, UnresolvedReferenceError
from ..schema_ast.nodes import Schema
from .naming import to_type_name

# Path segments that name the definitions table rather than a definition
DEFINITIONS_SEGMENTS = ("definitions", "$defs")


class ReferenceResolver:
    """Resolves $ref strings against a root schema."""

    def __init__(self, root: Schema, root_name: str | None = None):
        """
        Initialize the resolver.

        Args:
            root: The document root, target of `#`
            root_name: Name of the root type, needed when `#` is referenced by type
        """
        self.root = root
        self.root_name = root_name

    def resolve(self, ref: str) -> Schema:
        """
        Resolve a reference such as `#/definitions/Foo` to its Schema node.

        Segments are folded left to right from the root: `#` jumps back
        to the root, `definitions` keeps the current node, and any other
        segment is looked up in the current node's definitions.

        Raises:
            UnresolvedReferenceError: If a segment is not a known definition
        """
        node = self.root
        for segment in ref.split("/"):
            if segment == "#":
                node = self.root
            elif segment in DEFINITIONS_SEGMENTS:
                continue
            elif segment in node.definitions:
                node = node.definitions[segment]
            else:
                raise UnresolvedReferenceError(ref, segment)
        return node

    def type_name(self, ref: str) -> str:
        """
        Get the Rust type name a reference points to.

        Raises:
            MissingRootNameError: If `ref` is `#` and no root name was given
        """
        if ref == "#":
            if not self.root_name:
                raise MissingRootNameError()
            return to_type_name(self.root_name)
        return to_type_name(ref.split("/")[-1])
