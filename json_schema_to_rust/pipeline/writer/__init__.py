"""
Writer module.

Provides atomic, validated writing of generated code to disk.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter

__all__ = [
    "AtomicWriter",
]
