"""
Reference cycle breaking and alias cycle detection.

A struct that contains another declaration by value (directly or through
Option) cannot be part of a cycle, or the Rust type would have infinite
size. Vec, maps, Box and OneOrMany already store their items behind a
pointer and do not count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum

from ..errors import RecursiveAliasError
from .ir_nodes import Declaration, StructDef, TypeAlias, TypeKind, TypeRef

logger = logging.getLogger(__name__)


class _VisitState(Enum):
    VISITING = "visiting"
    DONE = "done"


def _by_value_target(type_ref: TypeRef) -> TypeRef | None:
    """Get the named type held inline by `type_ref`, if any."""
    if type_ref.kind is TypeKind.OPTIONAL:
        type_ref = type_ref.inner
    if type_ref.kind is TypeKind.NAMED:
        return type_ref
    return None


def _boxed(type_ref: TypeRef) -> TypeRef:
    """Box the inline part of `type_ref`, keeping any Option outermost."""
    if type_ref.kind is TypeKind.OPTIONAL:
        return TypeRef.wrap(TypeKind.OPTIONAL, TypeRef.wrap(TypeKind.BOXED, type_ref.inner))
    return TypeRef.wrap(TypeKind.BOXED, type_ref)


def _edges(declaration: Declaration) -> Iterator[tuple[object, str]]:
    """Yield (holder, attribute) pairs for every type slot of a declaration."""
    if isinstance(declaration, StructDef):
        for field_def in declaration.fields:
            yield field_def, "type_ref"
    elif isinstance(declaration, TypeAlias):
        yield declaration, "target_type"


def break_reference_cycles(declarations: list[Declaration]) -> list[tuple[str, str]]:
    """
    Box every by-value reference that closes a cycle between declarations.

    Declarations are walked depth-first in declaration order; the boxed
    edge of a cycle is the one that leads back onto the current path.

    Args:
        declarations: Declarations to update in place

    Returns:
        The (declaration, target) pairs whose reference was boxed
    """
    by_name: dict[str, Declaration] = {}
    for declaration in declarations:
        by_name.setdefault(declaration.name, declaration)

    state: dict[str, _VisitState] = {}
    boxed: list[tuple[str, str]] = []

    def visit(declaration: Declaration) -> None:
        state[declaration.name] = _VisitState.VISITING
        for holder, attr in _edges(declaration):
            type_ref = getattr(holder, attr)
            target = _by_value_target(type_ref)
            if target is None or target.name not in by_name:
                continue
            target_state = state.get(target.name)
            if target_state is _VisitState.VISITING:
                setattr(holder, attr, _boxed(type_ref))
                boxed.append((declaration.name, target.name))
                logger.debug("Boxed reference %s -> %s to break a cycle", declaration.name, target.name)
            elif target_state is None:
                visit(by_name[target.name])
        state[declaration.name] = _VisitState.DONE

    for declaration in declarations:
        if declaration.name not in state:
            visit(declaration)

    return boxed


def _named_targets(type_ref: TypeRef) -> Iterator[str]:
    """Yield the name of every declaration mentioned anywhere in `type_ref`."""
    if type_ref.kind is TypeKind.NAMED:
        yield type_ref.name
    for arg in type_ref.type_args:
        yield from _named_targets(arg)


def check_alias_cycles(declarations: list[Declaration]) -> None:
    """
    Reject type aliases that expand into themselves.

    Rust expands aliases eagerly, so an alias cycle is illegal even through
    Vec, maps or Box; only a struct or enum in the loop can hold it.

    Raises:
        RecursiveAliasError: If aliases refer to each other in a loop
    """
    aliases: dict[str, TypeAlias] = {}
    for declaration in declarations:
        if isinstance(declaration, TypeAlias):
            aliases.setdefault(declaration.name, declaration)

    state: dict[str, _VisitState] = {}
    path: list[str] = []

    def visit(name: str) -> None:
        state[name] = _VisitState.VISITING
        path.append(name)
        for target in _named_targets(aliases[name].target_type):
            if target not in aliases:
                continue
            target_state = state.get(target)
            if target_state is _VisitState.VISITING:
                raise RecursiveAliasError([*path[path.index(target) :], target])
            if target_state is None:
                visit(target)
        path.pop()
        state[name] = _VisitState.DONE

    for name in aliases:
        if name not in state:
            visit(name)
