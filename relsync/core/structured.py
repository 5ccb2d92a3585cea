"""Helpers for safely working with parsed JSON/TOML structures.

Use these at the boundary where manifests and config are ingested; they
validate at runtime and narrow types for the checker.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def lookup(table: Mapping[str, object], path: Sequence[str]) -> tuple[bool, object]:
    """Walk nested tables along path.

    Returns (True, value) when every segment resolves, else (False, None).
    """
    current: object = table
    for segment in path:
        node = as_str_dict(current)
        if node is None or segment not in node:
            return (False, None)
        current = node[segment]
    return (True, current)
