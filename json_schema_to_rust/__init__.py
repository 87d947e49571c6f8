"""JSON Schema to Rust Generator

A Python package for generating serde-annotated Rust type declarations
from JSON Schema definitions, with an optional rustfmt pass and atomic
output writing.
"""

__version__ = "0.3.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    CyclicReferenceError,
    FormatterConfig,
    FormatterError,
    MissingRootNameError,
    OutputConfig,
    OutputMode,
    OutputValidationError,
    RecursiveAliasError,
    PipelineGenerator,
    SchemaGenerationError,
    SchemaParseError,
    UnresolvedReferenceError,
    UnsupportedEnumValueError,
    generate,
)

__all__ = [
    "generate",
    "PipelineGenerator",
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
