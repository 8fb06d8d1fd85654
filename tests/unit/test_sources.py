from __future__ import annotations

from typing import List

import httpx
import pytest

from worklist.demo import demo_column_mappings
from worklist.domain.models import FetchParams, SortDirection, SortState
from worklist.errors import ConfigurationError, FetchError
from worklist.sources import (
    DataSource,
    DataSourceKind,
    DelegatingDataSource,
    RemoteDataSource,
    StaticDataSource,
    available_sources,
    build_query_params,
    create_data_source,
)

ENDPOINT = "https://worklist.test/api/orders"


def _params(**kwargs) -> FetchParams:
    return FetchParams(**kwargs)


def test_fetch_params_accept_wire_names():
    params = FetchParams.model_validate(
        {
            "filters": {"status": "Complete"},
            "sortConfig": {"key": "amount", "direction": "desc"},
            "globalSearch": "doe",
        }
    )
    assert params.sort_config == SortState(key="amount", direction=SortDirection.DESC)
    assert params.global_search == "doe"


def test_available_sources_lists_every_variant():
    assert available_sources() == ["delegating", "remote", "static"]


@pytest.mark.asyncio
async def test_static_source_filters_sorts_and_searches(worklist_rows, worklist_columns):
    source = StaticDataSource(worklist_rows, worklist_columns)
    assert isinstance(source, DataSource)
    assert source.kind is DataSourceKind.STATIC

    rows = await source.fetch(
        _params(
            filters={"status": "progress"},
            sort_config=SortState(key="amount", direction=SortDirection.DESC),
        )
    )
    amounts = [row["amount"] for row in rows]
    assert amounts == sorted(amounts, reverse=True)
    assert {row["status"] for row in rows} == {"In Progress"}
    assert len(rows) == 6


@pytest.mark.asyncio
async def test_static_source_with_field_mapping(worklist_rows):
    source = StaticDataSource(worklist_rows, {"customerName": "customer.name"})
    rows = await source.fetch(_params(global_search="SMITH"))
    assert [row["customer"]["name"] for row in rows] == ["Jane Smith"]


@pytest.mark.asyncio
async def test_static_source_with_demo_mappings_sorts_numbers_numerically(worklist_rows):
    source = StaticDataSource(worklist_rows, demo_column_mappings())
    rows = await source.fetch(_params(sort_config=SortState(key="amount")))
    assert [row["amount"] for row in rows][:3] == [450.25, 675.50, 850.00]

    rows = await source.fetch(_params(global_search="fiona@"))
    assert [row["customer"]["name"] for row in rows] == ["Fiona Apple"]


@pytest.mark.asyncio
async def test_static_source_returns_new_list_each_call(worklist_rows, worklist_columns):
    source = StaticDataSource(worklist_rows, worklist_columns)
    first = await source.fetch(_params())
    first.clear()
    second = await source.fetch(_params())
    assert len(second) == len(worklist_rows)


@pytest.mark.asyncio
async def test_delegating_source_forwards_params_verbatim():
    seen: List[FetchParams] = []

    async def fetch(params: FetchParams):
        seen.append(params)
        return [{"id": 1}]

    source = DelegatingDataSource(fetch)
    params = _params(global_search="x", filters={"a": "b"})
    assert await source.fetch(params) == [{"id": 1}]
    assert seen == [params]
    assert source.kind is DataSourceKind.DELEGATING


def test_delegating_source_requires_callable():
    with pytest.raises(TypeError):
        DelegatingDataSource("not callable")  # type: ignore[arg-type]


def test_build_query_params_only_sends_active_values():
    params = _params(
        global_search="doe",
        sort_config=SortState(key="amount", direction=SortDirection.DESC),
        filters={"status": "Complete", "customer": ""},
    )
    assert build_query_params(params) == [
        ("search", "doe"),
        ("sortBy", "amount"),
        ("sortOrder", "desc"),
        ("filter[status]", "Complete"),
    ]
    assert build_query_params(_params()) == []


@pytest.mark.asyncio
async def test_remote_source_sends_query_and_parses_rows():
    captured: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=[{"id": 1}, {"id": 2}])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = RemoteDataSource(ENDPOINT, client=client, retries=1)
        rows = await source.fetch(
            _params(
                global_search="doe",
                sort_config=SortState(key="amount"),
                filters={"status": "Complete"},
            )
        )

    assert rows == [{"id": 1}, {"id": 2}]
    params = captured[0].url.params
    assert captured[0].method == "GET"
    assert params["search"] == "doe"
    assert params["sortBy"] == "amount"
    assert params["sortOrder"] == "asc"
    assert params["filter[status]"] == "Complete"


@pytest.mark.asyncio
async def test_remote_source_raises_fetch_error_with_status_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = RemoteDataSource(ENDPOINT, client=client, retries=1)
        with pytest.raises(FetchError) as excinfo:
            await source.fetch(_params())

    assert str(excinfo.value) == "API error: Service Unavailable"
    assert excinfo.value.status_code == 503
    assert excinfo.value.status_text == "Service Unavailable"


@pytest.mark.asyncio
async def test_remote_source_rejects_non_array_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"rows": []})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = RemoteDataSource(ENDPOINT, client=client, retries=1)
        with pytest.raises(FetchError, match="JSON array"):
            await source.fetch(_params())


@pytest.mark.asyncio
async def test_remote_source_retries_transient_transport_errors():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=[])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = RemoteDataSource(ENDPOINT, client=client, retries=2)
        assert await source.fetch(_params()) == []
    assert calls["n"] == 2


@pytest.mark.asyncio
async def test_remote_source_wraps_persistent_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = RemoteDataSource(ENDPOINT, client=client, retries=1)
        with pytest.raises(FetchError, match="Network error"):
            await source.fetch(_params())


def test_remote_source_requires_endpoint():
    with pytest.raises(ConfigurationError):
        RemoteDataSource("")


def test_factory_selects_variant_by_configuration(worklist_rows, worklist_columns):
    async def fetch(params):
        return []

    assert create_data_source(rows=worklist_rows, columns=worklist_columns).kind is (
        DataSourceKind.STATIC
    )
    assert create_data_source(fetch_function=fetch).kind is DataSourceKind.DELEGATING
    assert create_data_source(endpoint=ENDPOINT).kind is DataSourceKind.REMOTE
    # Static rows win over the other options.
    assert create_data_source(
        rows=[], columns=worklist_columns, fetch_function=fetch, endpoint=ENDPOINT
    ).kind is DataSourceKind.STATIC


def test_factory_without_configuration_raises():
    with pytest.raises(ConfigurationError, match="No data source configured"):
        create_data_source()


def test_factory_static_rows_need_columns(worklist_rows):
    with pytest.raises(ConfigurationError):
        create_data_source(rows=worklist_rows)
