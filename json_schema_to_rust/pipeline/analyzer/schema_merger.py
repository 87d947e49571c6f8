"""
allOf schema merging.

Folds the components of an `allOf` into a single equivalent schema.
"""

from __future__ import annotations

import copy

from ..schema_ast.nodes import Schema


def merge_all_of(target: Schema, source: Schema) -> None:
    """
    Widen `target` in place so it also describes `source`.

    The rules are applied in order:

    1. properties missing from `target` are copied in, shared ones are merged recursively
    2. `source.ref` overwrites `target.ref`
    3. `source.description` overwrites `target.description`
    4. `required` becomes the union of both lists
    5. `type` keeps only the entries also listed in `source.type`

    `target` must be owned by the caller; nothing reachable from `source`
    is ever mutated or shared with `target`.
    """
    for name, prop in source.properties.items():
        if name in target.properties:
            merge_all_of(target.properties[name], prop)
        else:
            target.properties[name] = copy.deepcopy(prop)

    if source.ref is not None:
        target.ref = source.ref

    if source.description is not None:
        target.description = source.description

    for name in source.required:
        if name not in target.required:
            target.required.append(name)

    target.type = [t for t in target.type if t in source.type]
