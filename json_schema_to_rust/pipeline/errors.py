"""
Exceptions raised by the generator pipeline.

Every condition listed here aborts generation; there is no partial output.
"""

from __future__ import annotations


class SchemaGenerationError(Exception):
    """Base class for all fatal generation errors."""


class SchemaParseError(SchemaGenerationError):
    """Raised when the schema text or a schema fragment cannot be parsed."""

    def __init__(self, message: str, path: str = "#"):
        super().__init__(f"{message} (at {path})")
        self.path = path


class UnresolvedReferenceError(SchemaGenerationError):
    """Raised when a $ref path segment is not found in `definitions`."""

    def __init__(self, ref: str, segment: str):
        super().__init__(f"Expected definition: `{ref}` {segment}")
        self.ref = ref
        self.segment = segment


class MissingRootNameError(SchemaGenerationError):
    """Raised when `#` is referenced but no root type name was supplied."""

    def __init__(self):
        super().__init__("Schema references its root (`#`) but no root type name was given")


class UnsupportedEnumValueError(SchemaGenerationError):
    """Raised when an enum contains a non-string literal."""

    def __init__(self, name: str, value: object):
        super().__init__(f"Enum `{name}` contains non-string value {value!r}; only string enums are supported")
        self.name = name
        self.value = value


class CyclicReferenceError(SchemaGenerationError):
    """Raised when an allOf chain references itself while being resolved."""

    def __init__(self, chain: list[str]):
        super().__init__("Cyclic allOf reference: " + " -> ".join(chain))
        self.chain = chain


class FormatterError(SchemaGenerationError):
    """Raised when the external formatter is missing, times out or fails.

    This is fatal: generated code is never silently returned unformatted
    once formatting has been requested.
    """


class OutputValidationError(SchemaGenerationError):
    """Raised when generated code fails validation before being written."""


class RecursiveAliasError(SchemaGenerationError):
    """Raised when type aliases refer to each other with no struct in between."""

    def __init__(self, chain: list[str]):
        super().__init__("Recursive type alias: " + " -> ".join(chain))
        self.chain = chain
