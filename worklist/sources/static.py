"""
In-memory data source.

Wraps a fixed collection (mock data for development, or rows loaded from a
JSON file) and runs search, filters and sort over it on every call, exactly
as the client-side pipeline would.
"""

from __future__ import annotations

from typing import Iterable, List

from worklist.domain.models import ColumnsLike, FetchParams, Row, as_column_set
from worklist.pipeline import filter_and_sort
from worklist.sources.abstract import AbstractDataSource, DataSourceKind
from worklist.utils.logging import get_logger

log = get_logger(__name__)


class StaticDataSource(AbstractDataSource):
    """
    Serve rows from a fixed collection.

    Parameters
    ----------
    rows : iterable of Row
        The backing collection. It is copied once; rows are never mutated.
    columns : ColumnSet | sequence of ColumnDefinition | mapping
        Which paths are searchable, filterable and sortable. A plain mapping
        ``{field_name: dotted.path}`` yields untyped columns.
    """

    kind = DataSourceKind.STATIC
    description = "Fixed in-memory collection filtered and sorted per call."

    def __init__(self, rows: Iterable[Row], columns: ColumnsLike) -> None:
        self._rows: List[Row] = list(rows)
        self._columns = as_column_set(columns)

    @property
    def size(self) -> int:
        return len(self._rows)

    async def fetch(self, params: FetchParams) -> List[Row]:
        result = filter_and_sort(
            self._rows,
            self._columns,
            filters=params.filters,
            sort=params.sort_config,
            search=params.global_search,
        )
        log.debug(
            "Static source matched rows",
            extra={"rows": len(result), "total": len(self._rows)},
        )
        return result


__all__ = ["StaticDataSource"]
