"""
HTTP data source for the worklist.

Serializes the query into a GET request against a configured endpoint:

    ?search=<text>&sortBy=<key>&sortOrder=<asc|desc>&filter[<columnKey>]=<text>

Only non-empty values are sent; one `filter[...]` parameter per active
filter. The response body must be a JSON array of row objects.

Includes retry logic for transient transport failures using tenacity.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from worklist.config import get_settings
from worklist.domain.models import FetchParams, Row
from worklist.errors import ConfigurationError, FetchError
from worklist.sources.abstract import AbstractDataSource, DataSourceKind
from worklist.utils.logging import get_logger

log = get_logger(__name__)


def build_query_params(params: FetchParams) -> List[Tuple[str, str]]:
    """
    Translate FetchParams into ordered query-string pairs.
    """
    query: List[Tuple[str, str]] = []
    if params.global_search:
        query.append(("search", params.global_search))
    if params.sort_config.key:
        query.append(("sortBy", params.sort_config.key))
        query.append(("sortOrder", params.sort_config.direction.value))
    for key, text in params.active_filters.items():
        query.append((f"filter[{key}]", text))
    return query


class RemoteDataSource(AbstractDataSource):
    """
    Fetch rows from a REST endpoint with httpx.

    Parameters
    ----------
    endpoint : str
        Absolute URL of the collection resource.
    client : httpx.AsyncClient, optional
        Client to reuse. When omitted, a client is opened per call and closed
        afterwards.
    timeout : float, optional
        Per-request timeout in seconds. Defaults to settings.
    retries : int, optional
        Attempts for transient transport errors. Defaults to settings.
    """

    kind = DataSourceKind.REMOTE
    description = "REST endpoint queried with search/sort/filter parameters."

    def __init__(
        self,
        endpoint: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
    ) -> None:
        if not endpoint:
            raise ConfigurationError("Remote data source requires an endpoint URL")
        settings = get_settings()
        self.endpoint = endpoint
        self.timeout = timeout or settings.fetch_timeout_seconds
        self.retries = retries or settings.fetch_retries
        self._client = client

    async def _get(self, client: httpx.AsyncClient, query: List[Tuple[str, str]]) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await client.get(self.endpoint, params=query, timeout=self.timeout)
        raise FetchError("Retry loop ended without a response")  # pragma: no cover

    async def _request(self, query: List[Tuple[str, str]]) -> httpx.Response:
        if self._client is not None:
            return await self._get(self._client, query)
        async with httpx.AsyncClient() as client:
            return await self._get(client, query)

    async def fetch(self, params: FetchParams) -> List[Row]:
        query = build_query_params(params)
        try:
            response = await self._request(query)
        except httpx.TransportError as exc:
            log.warning(
                "Remote fetch failed",
                extra={"endpoint": self.endpoint, "error": str(exc)},
            )
            raise FetchError(f"Network error: {exc}") from exc

        if not response.is_success:
            status_text = response.reason_phrase or str(response.status_code)
            raise FetchError(
                f"API error: {status_text}",
                status_code=response.status_code,
                status_text=status_text,
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise FetchError("API error: response body is not valid JSON") from exc
        if not isinstance(payload, list):
            raise FetchError("API error: expected a JSON array of rows")

        log.debug(
            "Remote fetch succeeded",
            extra={"endpoint": self.endpoint, "rows": len(payload)},
        )
        return payload


__all__ = ["RemoteDataSource", "build_query_params"]
