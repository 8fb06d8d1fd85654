"""
Data sources package for the worklist.

This module re-exports the abstract interfaces and the concrete data source
classes so downstream code can import from `worklist.sources` directly.
"""

from worklist.sources.abstract import (
    AbstractDataSource,
    DataSource,
    DataSourceKind,
)
from worklist.sources.delegating import DelegatingDataSource, FetchFunction
from worklist.sources.factory import available_sources, create_data_source
from worklist.sources.remote import RemoteDataSource, build_query_params
from worklist.sources.static import StaticDataSource

__all__ = [
    # Abstracts
    "AbstractDataSource",
    "DataSource",
    "DataSourceKind",
    "FetchFunction",
    # Concrete sources
    "DelegatingDataSource",
    "RemoteDataSource",
    "StaticDataSource",
    # Construction
    "available_sources",
    "build_query_params",
    "create_data_source",
]
