"""
Terminal rendering of worklist pages with rich.

The reporter is the display half of the interactive layer: header labels
with sort indicators, cells rendered by column formatter or by declared type,
an empty-state row, and the pagination caption.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from worklist.controller import WorklistController
from worklist.domain.accessor import get_nested_value
from worklist.domain.comparator import coerce_timestamp
from worklist.domain.matching import to_text
from worklist.domain.models import (
    ColumnDefinition,
    ColumnSet,
    ColumnType,
    QueryResultPage,
    Row,
    SortDirection,
    SortState,
)
from worklist.forms import status_legend

NULL_PLACEHOLDER = "[dim]—[/dim]"
EMPTY_MESSAGE = "No data found"


def _format_number(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return to_text(value)
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _format_date(value: Any) -> str:
    ts = coerce_timestamp(value)
    if ts is None:
        return to_text(value)
    try:
        moment = datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return to_text(value)
    return moment.strftime("%b %d, %Y")


def format_cell(row: Row, column: ColumnDefinition) -> str:
    """
    Render one cell as rich markup.

    Column formatters win; otherwise the value is rendered by the column type.
    """
    value = get_nested_value(row, column.data_source)
    if column.formatter is not None:
        return column.formatter.format(row, value)
    if value is None:
        return NULL_PLACEHOLDER
    if column.type is ColumnType.DATE:
        text = _format_date(value)
    elif column.type is ColumnType.BOOLEAN:
        text = "Yes" if value else "No"
    elif column.type is ColumnType.NUMBER:
        text = _format_number(value)
    else:
        text = to_text(value)
    return escape(text)


def header_label(column: ColumnDefinition, sort: Optional[SortState]) -> str:
    label = escape(column.display_label)
    if sort is not None and sort.key == column.key:
        label += " ↑" if sort.direction is SortDirection.ASC else " ↓"
    return label


def render_page(
    columns: ColumnSet,
    page: QueryResultPage,
    sort: Optional[SortState] = None,
    title: str = "Worklist",
) -> Table:
    """
    Build a rich Table for one page of rows.
    """
    table = Table(title=title, box=box.ROUNDED, caption=page.label)
    for column in columns:
        justify = "right" if column.type is ColumnType.NUMBER else "left"
        style = "cyan" if column.sortable else "dim"
        table.add_column(header_label(column, sort), justify=justify, header_style=style)

    if not page.rows:
        table.add_row(f"[italic]{EMPTY_MESSAGE}[/italic]", *([""] * (len(columns) - 1)))
        return table

    for row in page.rows:
        table.add_row(*(format_cell(row, column) for column in columns))
    return table


def print_worklist(
    controller: WorklistController,
    console: Optional[Console] = None,
    show_legend: bool = True,
) -> None:
    """
    Print the controller's current page, its error state, and the status legend.
    """
    console = console or Console()
    if show_legend:
        console.print(f"Status Legend: {status_legend()}")
    if controller.error:
        console.print(f"[red]Error: {escape(controller.error)}[/red]")
    if controller.loading:
        console.print("[yellow]Loading...[/yellow]")
        return
    page = controller.current_page()
    console.print(render_page(controller.columns, page, controller.state.sort))


__all__ = [
    "format_cell",
    "header_label",
    "render_page",
    "print_worklist",
]
