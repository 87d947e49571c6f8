"""
Pipeline - JSON Schema to Rust generator.

This module provides a multi-phase architecture for generating Rust
type declarations from JSON schemas:

1. Phase 1 (Parser): Parse JSON Schema into Schema nodes
2. Phase 2 (Expander): Resolve references, merge allOf and build IR
3. Phase 3 (Backend): Render IR declarations as Rust source
4. Phase 4 (Formatter): Optional rustfmt pass
5. Phase 5 (Writer): Optional atomic write to disk
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .errors import (
    CyclicReferenceError,
    FormatterError,
    MissingRootNameError,
    OutputValidationError,
    RecursiveAliasError,
    SchemaGenerationError,
    SchemaParseError,
    UnresolvedReferenceError,
    UnsupportedEnumValueError,
)
from .generator import PipelineGenerator, generate
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "generate",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "SchemaGenerationError",
    "SchemaParseError",
    "UnresolvedReferenceError",
    "MissingRootNameError",
    "UnsupportedEnumValueError",
    "CyclicReferenceError",
    "FormatterError",
    "OutputValidationError",
    "RecursiveAliasError",
]
