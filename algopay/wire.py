"""
Wire values and the merge rule.

A wire value is the loosely-typed tree handed to the signing wallet:
strings, numbers, booleans, null, lists, and string-keyed mappings whose
key order is preserved. It is a one-way serialization target; nothing
parses it back into the transaction model.

Merge rule:
    merge(target, source) folds ``source`` into ``target``. When both are
    mappings, each key of ``source`` is applied in turn: a None value
    deletes the key from ``target``, anything else is merged recursively
    (or inserted). When either side is not a mapping, ``source`` wins.

Explicit None is how optional-but-absent fields are suppressed, so a
merged result never contains a null.
"""

from __future__ import annotations

import json
from typing import Union

WireValue = Union[str, int, bool, None, list["WireValue"], dict[str, "WireValue"]]


def merge(target: WireValue, source: WireValue) -> WireValue:
    """Merge ``source`` into ``target``.

    When both are dicts, ``target`` is mutated in place and returned.
    Otherwise ``source`` replaces ``target`` and is returned.

    Args:
        target: The value being updated.
        source: Incoming value. None entries delete keys.

    Returns:
        The merged value.
    """
    if not isinstance(target, dict) or not isinstance(source, dict):
        return source

    for key, value in source.items():
        if value is None:
            target.pop(key, None)
        elif key in target:
            target[key] = merge(target[key], value)
        elif isinstance(value, dict):
            # Fresh subtrees still go through the null-pruning rule.
            target[key] = merge({}, value)
        else:
            target[key] = value
    return target


def find_nulls(value: WireValue, path: str = "") -> list[str]:
    """Return the dotted paths of every null inside ``value``."""
    if value is None:
        return [path]
    if isinstance(value, dict):
        found: list[str] = []
        for key, item in value.items():
            found.extend(find_nulls(item, f"{path}.{key}" if path else key))
        return found
    if isinstance(value, list):
        found = []
        for index, item in enumerate(value):
            found.extend(find_nulls(item, f"{path}[{index}]"))
        return found
    return []


def dumps_wire(value: WireValue) -> str:
    """Render a wire value as compact JSON, keeping key order."""
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
