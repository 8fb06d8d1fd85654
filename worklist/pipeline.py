"""
Query pipeline for the worklist: search, filter, sort, paginate.

The steps always run in this order:

1. global search across every data column,
2. each active column filter (AND semantics),
3. stable sort when the sort key names a data column, otherwise input order,
4. total count of the surviving rows,
5. the page slice ``[(page - 1) * page_size, page * page_size)``.

Every function here is pure: rows are never mutated and identical inputs
always produce identical output.

Usage:
    from worklist.pipeline import run_query

    page = run_query(rows, columns, filters={"status": "complete"}, page_size=10)
    print(page.total_count, len(page.rows))
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from worklist.domain.comparator import sort_rows
from worklist.domain.matching import matches_filters, matches_search
from worklist.domain.models import (
    ColumnSet,
    ColumnsLike,
    QueryResultPage,
    QueryState,
    Row,
    SortState,
    as_column_set,
)
from worklist.errors import ValidationError


def filter_and_sort(
    rows: Iterable[Row],
    columns: ColumnSet,
    filters: Optional[Mapping[str, str]] = None,
    sort: Optional[SortState] = None,
    search: str = "",
) -> List[Row]:
    """
    Apply steps 1-3 of the pipeline and return the full matching collection.
    """
    data_columns = columns.data_columns
    result = [row for row in rows if matches_search(row, data_columns, search)]

    active = {key: text for key, text in (filters or {}).items() if text}
    if active:
        result = [row for row in result if matches_filters(row, columns, active)]

    if sort is not None:
        column = columns.get(sort.key)
        if column is not None and column.data_source:
            result = sort_rows(result, column, sort.direction)

    return result


def paginate(rows: Sequence[Row], page: int, page_size: int) -> QueryResultPage:
    """
    Slice one page out of an already filtered and sorted collection.

    Raises
    ------
    ValidationError
        If `page` is below 1 or `page_size` is not positive.
    """
    if page_size <= 0:
        raise ValidationError(f"page_size must be positive, got {page_size}")
    if page < 1:
        raise ValidationError(f"page must be 1 or greater, got {page}")
    start = (page - 1) * page_size
    return QueryResultPage(
        rows=list(rows[start : start + page_size]),
        total_count=len(rows),
        page=page,
        page_size=page_size,
    )


def run_query(
    rows: Iterable[Row],
    columns: ColumnsLike,
    filters: Optional[Mapping[str, str]] = None,
    sort: Optional[SortState] = None,
    search: str = "",
    page: int = 1,
    page_size: int = 10,
) -> QueryResultPage:
    """
    Run the full pipeline and return one page plus the pre-pagination count.

    Parameters
    ----------
    rows : iterable of Row
        Input collection; never mutated.
    columns : ColumnSet | sequence of ColumnDefinition | mapping
        Column configuration. A plain mapping is read as ``{key: dotted.path}``.
    filters : mapping, optional
        Column key to filter text. Empty text means no filter for that column.
    sort : SortState, optional
        Sort key and direction. Unknown or non-data keys keep input order.
    search : str
        Global search text; empty matches everything.
    page : int
        1-based page number. Pages past the end yield no rows.
    page_size : int
        Rows per page, must be positive.

    Returns
    -------
    QueryResultPage
        The requested page with `total_count` of all matching rows.
    """
    if page_size <= 0:
        raise ValidationError(f"page_size must be positive, got {page_size}")
    matched = filter_and_sort(rows, as_column_set(columns), filters, sort, search)
    return paginate(matched, page, page_size)


def run_state(
    rows: Iterable[Row],
    columns: ColumnsLike,
    state: QueryState,
    page_size: int = 10,
) -> QueryResultPage:
    """Run the pipeline for a QueryState."""
    return run_query(
        rows,
        columns,
        filters=state.filters,
        sort=state.sort,
        search=state.search,
        page=state.page,
        page_size=page_size,
    )


__all__ = ["filter_and_sort", "paginate", "run_query", "run_state"]
