"""
Data source selection from configuration.

Usage:
    from worklist.sources.factory import create_data_source

    source = create_data_source(rows=mock_rows, columns=columns)
    source = create_data_source(fetch_function=my_coroutine)
    source = create_data_source(endpoint="https://example.org/api/worklist")
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

import httpx

from worklist.domain.models import ColumnsLike, Row
from worklist.errors import ConfigurationError
from worklist.sources.abstract import DataSource, DataSourceKind
from worklist.sources.delegating import DelegatingDataSource, FetchFunction
from worklist.sources.remote import RemoteDataSource
from worklist.sources.static import StaticDataSource
from worklist.utils.logging import get_logger

log = get_logger(__name__)


def _source_descriptions() -> Dict[DataSourceKind, str]:
    """Registry of available data source variants."""
    return {
        DataSourceKind.STATIC: StaticDataSource.description,
        DataSourceKind.DELEGATING: DelegatingDataSource.description,
        DataSourceKind.REMOTE: RemoteDataSource.description,
    }


def available_sources() -> List[str]:
    """List available data source kinds."""
    return sorted(kind.value for kind in _source_descriptions())


def create_data_source(
    rows: Optional[Iterable[Row]] = None,
    columns: Optional[ColumnsLike] = None,
    fetch_function: Optional[FetchFunction] = None,
    endpoint: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> DataSource:
    """
    Build the data source variant the configuration asks for.

    Precedence: `rows` (static), then `fetch_function` (delegating), then
    `endpoint` (remote).

    Raises
    ------
    ConfigurationError
        If none of `rows`, `fetch_function` or `endpoint` is given, or static
        rows come without columns.
    """
    builders: List[Callable[[], Optional[DataSource]]] = [
        lambda: _static(rows, columns),
        lambda: DelegatingDataSource(fetch_function) if fetch_function is not None else None,
        lambda: RemoteDataSource(endpoint, client=client) if endpoint else None,
    ]
    for build in builders:
        source = build()
        if source is not None:
            log.debug("Data source configured", extra={"kind": source.kind.value})
            return source
    raise ConfigurationError(
        "No data source configured. Provide either rows, fetch_function, or endpoint."
    )


def _static(rows: Optional[Iterable[Row]], columns: Optional[ColumnsLike]) -> Optional[DataSource]:
    if rows is None:
        return None
    if columns is None:
        raise ConfigurationError("Static rows require columns or a field-to-path mapping")
    return StaticDataSource(rows, columns)


__all__ = ["available_sources", "create_data_source"]
