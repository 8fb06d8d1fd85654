"""
Data source that forwards every call to a caller-supplied coroutine function.
"""

from __future__ import annotations

from typing import Awaitable, Callable, List

from worklist.domain.models import FetchParams, Row
from worklist.sources.abstract import AbstractDataSource, DataSourceKind

FetchFunction = Callable[[FetchParams], Awaitable[List[Row]]]


class DelegatingDataSource(AbstractDataSource):
    """
    Forward FetchParams verbatim to `fetch_function` and return its rows.
    """

    kind = DataSourceKind.DELEGATING
    description = "Caller-supplied async fetch function."

    def __init__(self, fetch_function: FetchFunction) -> None:
        if not callable(fetch_function):
            raise TypeError("fetch_function must be callable")
        self._fetch_function = fetch_function

    async def fetch(self, params: FetchParams) -> List[Row]:
        return list(await self._fetch_function(params))


__all__ = ["DelegatingDataSource", "FetchFunction"]
