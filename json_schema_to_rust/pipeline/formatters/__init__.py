"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from .base import Formatter
from .rustfmt_formatter import RustfmtFormatter, format_with_rustfmt

__all__ = [
    "Formatter",
    "RustfmtFormatter",
    "format_with_rustfmt",
]
