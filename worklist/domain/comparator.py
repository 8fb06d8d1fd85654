"""
Type-aware row comparison and stable sorting.

Absent values (None, or values that cannot be coerced to the column type)
always sort after present values, in both directions. Only the relative
order of two present values flips for a descending sort.
"""

from __future__ import annotations

import functools
import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Optional, Tuple

from worklist.domain.accessor import get_nested_value
from worklist.domain.matching import to_text
from worklist.domain.models import ColumnDefinition, ColumnType, Row, SortDirection

_ISO_UTC_SUFFIX = re.compile(r"[Zz]$")


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def coerce_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (bool, int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip() or "0")
        except ValueError:
            return None
    else:
        return None
    return number if not math.isnan(number) else None


def coerce_timestamp(value: Any) -> Optional[float]:
    """
    Parse a date-like value into a POSIX timestamp.

    Accepts datetimes, dates, ISO-8601 strings (a trailing ``Z`` means UTC)
    and epoch numbers in milliseconds, as JavaScript clients send them. Naive
    values are read as UTC. Returns None when the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number / 1000.0 if math.isfinite(number) else None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(_ISO_UTC_SUFFIX.sub("+00:00", value.strip()))
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def _lexical_key(value: Any) -> Tuple[str, str]:
    text = to_text(value)
    return (text.casefold(), text)


def _compare_present(a: Any, b: Any, column_type: Optional[ColumnType]) -> Optional[int]:
    """
    Compare two present values ascending; None means one side could not be coerced.
    """
    if column_type is ColumnType.NUMBER:
        x, y = coerce_number(a), coerce_number(b)
    elif column_type is ColumnType.DATE:
        x, y = coerce_timestamp(a), coerce_timestamp(b)
    elif column_type is ColumnType.BOOLEAN:
        return int(bool(a)) - int(bool(b))
    elif column_type is None and _is_real_number(a) and _is_real_number(b):
        return _sign(float(a) - float(b))
    else:
        ka, kb = _lexical_key(a), _lexical_key(b)
        return (ka > kb) - (ka < kb)

    if x is None or y is None:
        return None
    return _sign(x - y)


def _is_real_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def compare_values(
    a: Any, b: Any, column_type: Optional[ColumnType], direction: SortDirection
) -> int:
    """
    Compare two resolved values, nulls last regardless of direction.

    Returns -1 (a before b), 0, or 1.
    """
    if a is not None and b is not None:
        result = _compare_present(a, b, column_type)
        if result is not None:
            return -result if direction is SortDirection.DESC else result
        # Uncoercible values are treated as absent below.
        a = a if _coercible(a, column_type) else None
        b = b if _coercible(b, column_type) else None

    if a is None and b is None:
        return 0
    if a is None:
        return 1
    return -1


def _coercible(value: Any, column_type: Optional[ColumnType]) -> bool:
    if column_type is ColumnType.NUMBER:
        return coerce_number(value) is not None
    if column_type is ColumnType.DATE:
        return coerce_timestamp(value) is not None
    return True


def compare_rows(
    row_a: Row, row_b: Row, column: ColumnDefinition, direction: SortDirection
) -> int:
    """Compare two rows on a column's data path."""
    return compare_values(
        get_nested_value(row_a, column.data_source),
        get_nested_value(row_b, column.data_source),
        column.type,
        direction,
    )


def sort_rows(
    rows: Iterable[Row], column: ColumnDefinition, direction: SortDirection
) -> List[Row]:
    """
    Return a new, stably sorted list of rows.
    """
    key: Callable[[Row], Any] = functools.cmp_to_key(
        lambda a, b: compare_rows(a, b, column, direction)
    )
    return sorted(rows, key=key)


__all__ = [
    "coerce_number",
    "coerce_timestamp",
    "compare_values",
    "compare_rows",
    "sort_rows",
]
