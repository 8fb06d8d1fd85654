"""
Dotted-path field access for schema-less rows.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


def get_nested_value(row: Any, path: Optional[str]) -> Any:
    """
    Resolve a dot-delimited path against a row.

    Mapping segments are looked up by key, sequence segments by integer index
    (``"visits.0.date"``). Returns None ("absent") when the path is empty or
    any step is missing or None. Never raises for malformed rows; ``False``,
    ``0`` and ``""`` are returned as-is.
    """
    if not path:
        return None
    value = row
    for segment in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(segment)
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            try:
                value = value[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return value


__all__ = ["get_nested_value"]
