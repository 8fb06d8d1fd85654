"""
Domain package for the worklist.

Exports the column/query models and the leaf operations of the pipeline:
field access, row matching, and comparison. Keep this package focused on
data definitions and pure functions over rows.
"""

from worklist.domain.accessor import get_nested_value
from worklist.domain.comparator import compare_rows, sort_rows
from worklist.domain.matching import matches_filters, matches_search, to_text
from worklist.domain.models import (
    CellFormatter,
    ColumnDefinition,
    ColumnSet,
    ColumnType,
    FetchParams,
    QueryResultPage,
    QueryState,
    Row,
    SortDirection,
    SortState,
)

__all__ = [
    "CellFormatter",
    "ColumnDefinition",
    "ColumnSet",
    "ColumnType",
    "FetchParams",
    "QueryResultPage",
    "QueryState",
    "Row",
    "SortDirection",
    "SortState",
    "compare_rows",
    "get_nested_value",
    "matches_filters",
    "matches_search",
    "sort_rows",
    "to_text",
]
