"""
Worklist - configurable tabular data pipeline for clinical form tracking.

This package provides a generic, configuration-driven data table:

- Column definitions with dotted data paths, types and cell formatters
- A pure query pipeline (global search, column filters, sort, pagination)
- Pluggable asynchronous data sources (static, delegating, remote HTTP)
- An interactive controller that commits only the newest fetch result
- Terminal rendering and a CLI, plus the patient segment questionnaire scorer
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from worklist.config import Settings, get_settings
from worklist.controller import WorklistController
from worklist.domain.models import (
    CellFormatter,
    ColumnDefinition,
    ColumnSet,
    ColumnType,
    FetchParams,
    QueryResultPage,
    QueryState,
    SortDirection,
    SortState,
)
from worklist.errors import ConfigurationError, FetchError, ValidationError, WorklistError
from worklist.pipeline import filter_and_sort, run_query, run_state
from worklist.sources import (
    DataSource,
    DataSourceKind,
    DelegatingDataSource,
    RemoteDataSource,
    StaticDataSource,
    create_data_source,
)
from worklist.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Models
    "CellFormatter",
    "ColumnDefinition",
    "ColumnSet",
    "ColumnType",
    "FetchParams",
    "QueryResultPage",
    "QueryState",
    "SortDirection",
    "SortState",
    # Pipeline
    "filter_and_sort",
    "run_query",
    "run_state",
    # Data sources
    "DataSource",
    "DataSourceKind",
    "DelegatingDataSource",
    "RemoteDataSource",
    "StaticDataSource",
    "create_data_source",
    # Controller
    "WorklistController",
    # Errors
    "WorklistError",
    "ConfigurationError",
    "FetchError",
    "ValidationError",
    # Logging
    "configure_logging",
    "get_logger",
]
