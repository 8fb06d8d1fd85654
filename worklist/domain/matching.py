"""
Row matching for global search and per-column filters.

Both modes are case-insensitive substring containment on the text form of
the value a column's data path resolves to.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

from worklist.domain.accessor import get_nested_value
from worklist.domain.models import ColumnDefinition, ColumnSet, Row


def to_text(value: Any) -> str:
    """
    Text form used for matching and lexical sorting.

    Booleans render as ``true``/``false``, integral floats drop the trailing
    ``.0``, sequences join their items with commas. Mappings contribute their
    values only, joined the same way, so keys never match a search.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return _join(value.values())
    if isinstance(value, Sequence) and not isinstance(value, bytes):
        return _join(value)
    return str(value)


def _join(items: Iterable[Any]) -> str:
    return ",".join("" if item is None else to_text(item) for item in items)


def _contains(value: Any, needle_lower: str) -> bool:
    return value is not None and needle_lower in to_text(value).lower()


def matches_search(row: Row, columns: Iterable[ColumnDefinition], text: str) -> bool:
    """True if any data column of the row contains `text`; empty text matches all."""
    if not text:
        return True
    needle = text.lower()
    return any(
        _contains(get_nested_value(row, column.data_source), needle)
        for column in columns
        if column.data_source
    )


def matches_filters(row: Row, columns: ColumnSet, filters: Mapping[str, str]) -> bool:
    """
    True if the row satisfies every non-empty column filter.

    Filters naming unknown columns or columns without a data path are ignored.
    An absent value never satisfies a non-empty filter.
    """
    for key, text in filters.items():
        if not text:
            continue
        column = columns.get(key)
        if column is None or not column.data_source:
            continue
        if not _contains(get_nested_value(row, column.data_source), str(text).lower()):
            return False
    return True


__all__ = ["to_text", "matches_search", "matches_filters"]
