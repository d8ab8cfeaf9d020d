"""Helpers for safely working with untyped input mappings.

Use these at the boundaries where options arrive as strings: the process
environment, parsed TOML and CLI overrides.
"""

from __future__ import annotations

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


def get_bool_text(table: Mapping[str, object], key: str) -> str | None:
    """Get a boolean-ish value as text.

    TOML booleans are rendered as ``"true"``/``"false"`` so they go through
    the same validation as environment strings.
    """
    value = table.get(key)
    if isinstance(value, bool):
        return "true" if value else "false"
    return get_str(table, key)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))
