"""
Pipeline generator orchestrating all phases.

1. Phase 1 (Parser): Parse JSON Schema into Schema nodes
2. Phase 2 (Expander): Resolve references, merge allOf and build IR
3. Phase 3 (Backend): Render IR declarations as Rust source
4. Phase 4 (Formatter): Optional rustfmt pass
5. Phase 5 (Writer): Optional atomic write to disk
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .analyzer import IR, SchemaExpander
from .backends import RustBackend
from .config import CodeGeneratorConfig, OutputMode
from .errors import FormatterError, SchemaParseError
from .formatters import RustfmtFormatter
from .schema_ast import Schema, SchemaParser
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates Rust declarations from a JSON Schema document."""

    def __init__(self, root_name: str | None, schema: dict[str, Any], config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            root_name: Name of the root type, or None to emit only definitions
            schema: The decoded JSON Schema document
            config: Code generation configuration
        """
        self.root_name = root_name
        self.schema = schema
        self.config = config or CodeGeneratorConfig()

        self.parser = SchemaParser()
        self.expander = SchemaExpander(self.config)
        self.backend = RustBackend(self.config)
        self.formatter = RustfmtFormatter()

    def parse(self) -> Schema:
        """Phase 1: parse the document into Schema nodes."""
        return self.parser.parse(self.schema)

    def analyze(self) -> IR:
        """Phases 1 and 2: parse and expand the document into IR."""
        return self.expander.expand(self.parse(), self.root_name)

    def generate(self) -> str:
        """
        Run the pipeline and return the generated Rust code.

        Raises:
            SchemaGenerationError: On any fatal schema or formatter error
        """
        ir = self.analyze()
        code = self.backend.generate(ir)
        logger.debug(
            "Generated %d declarations (one-or-many helper: %s)",
            len(ir.declarations),
            ir.needs_one_or_many,
        )

        if self.config.formatter.enabled:
            if not self.formatter.is_available(self.config.formatter):
                raise FormatterError(f"Formatter is not available: {self.config.formatter.command}")
            code = self.formatter.format(code, self.config.formatter)

        return code

    def generate_to_file(self, path: Path | str) -> str:
        """
        Generate code and write it to `path` according to the output config.

        Returns:
            The generated code

        Raises:
            FileExistsError: If the file exists and the mode is ERROR_IF_EXISTS
            OutputValidationError: If the code fails validation
        """
        path = Path(path)
        code = self.generate()
        output = self.config.output

        if output.atomic_write:
            writer = AtomicWriter()
            if output.mode == OutputMode.ERROR_IF_EXISTS:
                writer.write_if_not_exists(path, code, validate=output.validate_before_write)
            else:
                writer.write(path, code, validate=output.validate_before_write)
        else:
            if output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
                raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
            path.write_text(code, encoding="utf-8")
        return code


def generate(root_name: str | None, schema_text: str, config: CodeGeneratorConfig | None = None) -> str:
    """
    Generate Rust declarations from JSON Schema text.

    Args:
        root_name: Name of the root type, or None to emit only definitions
        schema_text: The JSON Schema document as text
        config: Code generation configuration

    Returns:
        The generated (and, if enabled, formatted) Rust code

    Raises:
        SchemaGenerationError: On any fatal error
    """
    try:
        schema = json.loads(schema_text)
    except json.JSONDecodeError as e:
        raise SchemaParseError(f"Invalid JSON: {e.msg} at line {e.lineno} column {e.colno}") from e
    return PipelineGenerator(root_name, schema, config).generate()
