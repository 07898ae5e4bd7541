"""Recursive merging of nested dictionaries."""

from __future__ import annotations

from typing import Any


def recursive_copy(value: Any) -> Any:
    """Return a copy of value in which every nested dict is copied."""
    if not isinstance(value, dict):
        return value
    return {key: recursive_copy(item) for key, item in value.items()}


def recursive_merge(dest: dict[str, Any], source: dict[str, Any] | None) -> None:
    """Merge source into dest in place, descending into nested dicts."""
    if not source:
        return
    for key, source_value in source.items():
        dest_value = dest.get(key)
        if isinstance(dest_value, dict) and isinstance(source_value, dict):
            recursive_merge(dest_value, source_value)
        else:
            dest[key] = recursive_copy(source_value)