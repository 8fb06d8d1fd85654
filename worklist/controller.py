"""
Interactive controller for a worklist: owns the query state, drives the data
source, and exposes the current page.

The controller plays the role of the UI layer. Search, filter and sort
changes reset the page to 1 and trigger a fetch; page changes only re-slice
the rows already held. Every fetch gets a sequence number and only the
result of the most recently issued fetch is committed, so a slow, superseded
request can never overwrite newer results.

Usage:
    from worklist.controller import WorklistController

    controller = WorklistController(columns, data_source, page_size=10)
    await controller.refresh()
    await controller.set_search("smith")
    page = controller.current_page()
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from worklist.config import get_settings
from worklist.domain.models import ColumnsLike, QueryResultPage, QueryState, Row, as_column_set
from worklist.errors import ConfigurationError, FetchError, ValidationError
from worklist.pipeline import run_state
from worklist.sources.abstract import DataSource
from worklist.utils.logging import get_logger
from worklist.utils.profiler import profile_block

log = get_logger(__name__)

NO_DATA_SOURCE_MESSAGE = "No data source provided"
DEFAULT_FETCH_ERROR = "Failed to fetch data"


class WorklistController:
    """
    Stateful caller around the pure query pipeline.

    Parameters
    ----------
    columns : ColumnSet | sequence of ColumnDefinition | mapping
        Column configuration, fixed for the controller's lifetime.
    data_source : DataSource | None
        Row supplier. None leaves the controller in a configuration-error state.
    page_size : int, optional
        Rows per page. Defaults to settings; must be positive.
    fetch_timeout : float, optional
        Seconds to wait for a fetch before reporting an error. Defaults to settings.
    """

    def __init__(
        self,
        columns: ColumnsLike,
        data_source: Optional[DataSource],
        page_size: Optional[int] = None,
        fetch_timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.columns = as_column_set(columns)
        self.data_source = data_source
        self.page_size = settings.page_size if page_size is None else page_size
        if self.page_size <= 0:
            raise ValidationError(f"page_size must be positive, got {self.page_size}")
        self.fetch_timeout = fetch_timeout or settings.fetch_timeout_seconds

        self.state = QueryState()
        self.rows: List[Row] = []
        self.loading = False
        self.error: Optional[str] = None
        self.error_type: Optional[str] = None

        self._issued = 0
        self._committed = 0

    @property
    def latest_request(self) -> int:
        return self._issued

    @property
    def committed_request(self) -> int:
        return self._committed

    async def refresh(self) -> bool:
        """
        Fetch rows for the current state.

        Returns
        -------
        bool
            True if this call's result (rows or error) was committed, False if
            a newer fetch superseded it while it was pending.
        """
        if self.data_source is None:
            self._fail(ConfigurationError(NO_DATA_SOURCE_MESSAGE))
            return True

        self._issued += 1
        sequence = self._issued
        params = self.state.to_fetch_params()
        self.loading = True
        self.error = None
        self.error_type = None

        rows: Optional[List[Row]] = None
        failure: Optional[Exception] = None
        with profile_block("fetch") as stats:
            try:
                rows = await asyncio.wait_for(
                    self.data_source.fetch(params), timeout=self.fetch_timeout
                )
            except asyncio.TimeoutError:
                failure = FetchError(f"Data source timed out after {self.fetch_timeout:g}s")
            except Exception as exc:  # noqa: BLE001 - any source failure becomes error state
                failure = exc

        stats.extra.update(
            {
                "request": sequence,
                "kind": self.data_source.kind.value,
                "rows": len(rows) if rows is not None else 0,
            }
        )

        if sequence != self._issued:
            log.debug("Discarding superseded fetch result", extra=stats.as_log_extra())
            return False

        self._committed = sequence
        self.loading = False
        if failure is not None:
            log.warning(
                f"[FETCH FAILED] {failure}",
                extra={**stats.as_log_extra(), "error": str(failure)},
            )
            self._fail(failure)
        else:
            self.rows = list(rows or [])
            log.info("[FETCH COMMITTED]", extra=stats.as_log_extra())
        return True

    def _fail(self, exc: Exception) -> None:
        self.loading = False
        self.rows = []
        self.error = str(exc) or DEFAULT_FETCH_ERROR
        self.error_type = type(exc).__name__

    async def set_search(self, text: str) -> bool:
        self.state = self.state.with_search(text)
        return await self.refresh()

    async def set_filter(self, column_key: str, text: str) -> bool:
        column = self.columns.get(column_key)
        if column is None or not column.filterable:
            log.debug("Ignoring filter on non-data column", extra={"column": column_key})
            return False
        self.state = self.state.with_filter(column_key, text)
        return await self.refresh()

    async def clear_filters(self) -> bool:
        self.state = self.state.without_filters()
        return await self.refresh()

    async def toggle_sort(self, column_key: str) -> bool:
        column = self.columns.get(column_key)
        if column is None or not column.sortable:
            log.debug("Ignoring sort on non-data column", extra={"column": column_key})
            return False
        self.state = self.state.with_sort(column_key)
        return await self.refresh()

    def set_page(self, page: int) -> None:
        """Move to `page`, clamped to the available pages. Does not refetch."""
        last = max(1, self.current_page_at(1).total_pages)
        self.state = self.state.with_page(min(max(1, page), last))

    def next_page(self) -> None:
        self.set_page(self.state.page + 1)

    def previous_page(self) -> None:
        self.set_page(self.state.page - 1)

    def current_page_at(self, page: int) -> QueryResultPage:
        return run_state(self.rows, self.columns, self.state.with_page(page), self.page_size)

    def current_page(self) -> QueryResultPage:
        """Run the pipeline over the committed rows for the current state."""
        return run_state(self.rows, self.columns, self.state, self.page_size)

    def page_label(self) -> str:
        return self.current_page().label


__all__ = ["WorklistController", "NO_DATA_SOURCE_MESSAGE"]
