"""Identifier helpers."""

from __future__ import annotations

from typing import Any


def is_id(value: Any) -> bool:
    """
    True when value is a numeric resource id.

    Strings are always treated as uuids, names or slugs, even if they are
    made of digits. bool is excluded although it subclasses int.
    """
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = ["is_id"]
