from __future__ import annotations

import pytest
from rich.console import Console

from worklist.controller import WorklistController
from worklist.demo import demo_columns
from worklist.domain.models import (
    ColumnDefinition,
    ColumnSet,
    ColumnType,
    QueryResultPage,
    SortDirection,
    SortState,
)
from worklist.reporter import format_cell, header_label, print_worklist, render_page
from worklist.sources import StaticDataSource


def _render(renderable) -> str:
    console = Console(record=True, width=200, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_cells_render_by_type():
    row = {"n": 1250.5, "d": "2024-01-15", "b": False, "s": "[x]", "missing": None}
    assert format_cell(row, ColumnDefinition(key="n", data_source="n", type=ColumnType.NUMBER)) == "1,250.5"
    assert format_cell(row, ColumnDefinition(key="d", data_source="d", type=ColumnType.DATE)) == "Jan 15, 2024"
    assert format_cell(row, ColumnDefinition(key="b", data_source="b", type=ColumnType.BOOLEAN)) == "No"
    assert format_cell(row, ColumnDefinition(key="s", data_source="s")) == "\\[x]"
    assert "—" in format_cell(row, ColumnDefinition(key="m", data_source="missing"))


def test_header_shows_sort_indicator():
    column = ColumnDefinition(key="name", label="Name", data_source="name")
    assert header_label(column, SortState(key="name")) == "Name ↑"
    assert header_label(column, SortState(key="name", direction=SortDirection.DESC)) == "Name ↓"
    assert header_label(column, SortState(key="other")) == "Name"


def test_render_page_lists_rows_and_caption(worklist_rows):
    page = QueryResultPage(rows=worklist_rows[:2], total_count=10, page=1, page_size=2)
    text = _render(render_page(demo_columns(), page, SortState(key="amount")))

    assert "FORCE ID" in text
    assert "Amount ↑" in text
    assert "John Doe" in text and "Jane Smith" in text
    assert "1,250.5" in text
    assert "Page 1 of 5 (10 total items)" in text


def test_render_empty_page():
    page = QueryResultPage(rows=[], total_count=0, page=1, page_size=10)
    text = _render(render_page(demo_columns(), page))
    assert "No data found" in text
    assert "Page 1 of 1 (0 total items)" in text


@pytest.mark.asyncio
async def test_print_worklist_shows_error_and_legend():
    controller = WorklistController(demo_columns(), None)
    await controller.refresh()

    console = Console(record=True, width=200, color_system=None)
    print_worklist(controller, console)
    text = console.export_text()

    assert "Status Legend" in text
    assert "Error: No data source provided" in text


@pytest.mark.asyncio
async def test_print_worklist_renders_current_page(worklist_rows):
    columns = demo_columns()
    controller = WorklistController(columns, StaticDataSource(worklist_rows, columns))
    await controller.set_filter("status", "Complete")

    console = Console(record=True, width=250, color_system=None)
    print_worklist(controller, console, show_legend=False)
    text = console.export_text()

    assert "Charlie Brown" in text and "Fiona Apple" in text
    assert "John Doe" not in text
    assert "Page 1 of 1 (2 total items)" in text


def test_epoch_millisecond_dates_render_and_out_of_range_falls_back():
    column = ColumnDefinition(key="d", data_source="d", type=ColumnType.DATE)
    assert format_cell({"d": 1705276800000}, column) == "Jan 15, 2024"
    assert format_cell({"d": 1e20}, column) == "100000000000000000000"

    page = QueryResultPage(rows=[{"d": 1705276800000}], total_count=1, page=1, page_size=10)
    text = _render(render_page(ColumnSet([column]), page))
    assert "Jan 15, 2024" in text
