"""
Utility functions for JSON Schema to Rust generator.
"""

import re
import textwrap

# Regex pattern to split text into words, handling camelCase and acronym boundaries
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Characters that cannot appear in an identifier ($, #, /) are dropped.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "simpleTypes" -> "SimpleTypes"
        "HTTPServer" -> "HttpServer"
        "$schema" -> "Schema"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    return "".join(word.capitalize() for word in _split_into_words(text))


def to_snake_case(text: str) -> str:
    """Convert camelCase, PascalCase, or separated text to snake_case.

    Examples:
        "firstName" -> "first_name"
        "sourceReference" -> "source_reference"
        "HTTPServer" -> "http_server"
        "$ref" -> "ref"
    """
    if not text:
        return ""
    return "_".join(word.lower() for word in _split_into_words(text))


def make_doc_comment(comment: str, width: int) -> str:
    """Render a description as `///` doc comment lines wrapped to `width` columns.

    Explicit line breaks in the description are preserved.
    """
    lines = []
    for paragraph in comment.strip().splitlines():
        wrapped = textwrap.wrap(paragraph, width=max(width - 4, 20), break_long_words=False, break_on_hyphens=False)
        if not wrapped:
            lines.append("///")
            continue
        lines.extend(f"/// {line}" for line in wrapped)
    return "\n".join(lines)
