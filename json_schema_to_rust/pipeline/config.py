"""
Configuration for the code generator pipeline.

Extends the generation options with formatter and output options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the existing file


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the rustfmt post-processing pass."""

    # Whether formatting is enabled
    enabled: bool = False

    # Executable to invoke
    command: str = "rustfmt"

    # Rust edition passed to the formatter
    edition: str = "2021"

    # Seconds before the formatter process is considered hung
    timeout: int = 30


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Emit `use serde::{Deserialize, Serialize};`
    add_serde_imports: bool = True

    # Derives placed on every struct and enum, before Default/Deserialize/Serialize
    derives: list[str] = field(default_factory=lambda: ["Clone", "PartialEq", "Debug"])

    # Map type used for additionalProperties objects
    map_type: str = "::std::collections::BTreeMap"

    # Line length used when wrapping doc comments
    line_length: int = 100

    # Box fields that close a by-value reference cycle between declarations
    break_reference_cycles: bool = True

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "add_serde_imports": self.add_serde_imports,
            "derives": list(self.derives),
            "map_type": self.map_type,
            "line_length": self.line_length,
            "break_reference_cycles": self.break_reference_cycles,
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": self.formatter.command,
                "edition": self.formatter.edition,
                "timeout": self.formatter.timeout,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
