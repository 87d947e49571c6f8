"""
Schema AST module.

Contains the Schema node definition and the parser for JSON Schema.
"""

from __future__ import annotations

from .nodes import Schema, SimpleType
from .parser import SchemaParser

__all__ = [
    "Schema",
    "SimpleType",
    "SchemaParser",
]
