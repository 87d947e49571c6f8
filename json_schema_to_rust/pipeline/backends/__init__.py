"""
Code generation backends.

Render IR declarations as target-language source text.
"""

from __future__ import annotations

from .base import CodeBackend
from .rust_backend import RustBackend, rust_string_literal

__all__ = [
    "CodeBackend",
    "RustBackend",
    "rust_string_literal",
]
