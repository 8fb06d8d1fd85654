from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from worklist.config import get_settings
from worklist.controller import WorklistController
from worklist.demo import demo_columns, mock_rows
from worklist.domain.models import QueryState, SortDirection, SortState
from worklist.errors import ConfigurationError, ValidationError
from worklist.reporter import print_worklist
from worklist.segments.algorithm import QUESTION_IDS, calculate_segment
from worklist.segments.notify import UserInfo, generate_email_content, send_results_email
from worklist.sources.abstract import DataSource
from worklist.sources.factory import available_sources, create_data_source
from worklist.utils.logging import configure_logging

app = typer.Typer(help="Patient worklist and segment questionnaire CLI.")


def _parse_filters(pairs: List[str]) -> Dict[str, str]:
    filters: Dict[str, str] = {}
    for pair in pairs:
        key, sep, text = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Filter '{pair}' must look like column=text")
        filters[key.strip()] = text
    return filters


def _build_source(endpoint: Optional[str], data_file: Optional[Path], show_tags: bool) -> DataSource:
    if data_file is not None:
        rows = json.loads(data_file.read_text(encoding="utf-8"))
        return create_data_source(rows=rows, columns=demo_columns(show_tags))
    if endpoint:
        return create_data_source(endpoint=endpoint)
    return create_data_source(rows=mock_rows(), columns=demo_columns(show_tags))


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | page_size={settings.page_size} "
        f"endpoint={settings.api_endpoint or '-'} timeout={settings.fetch_timeout_seconds}s "
        f"retries={settings.fetch_retries} email={'on' if settings.email_configured else 'off'}"
    )
    typer.echo("Available data sources: " + ", ".join(available_sources()))


@app.command()
def show(
    search: str = typer.Option("", "--search", "-q", help="Global search text."),
    filters: List[str] = typer.Option(
        [], "--filter", "-f", help="Column filter as key=text; repeatable."
    ),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Column key to sort by."),
    desc: bool = typer.Option(False, "--desc", help="Sort descending."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number (1-based)."),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", min=1, help="Rows per page (default from settings)."
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", help="Remote endpoint returning a JSON array of rows."
    ),
    data_file: Optional[Path] = typer.Option(
        None, "--data-file", exists=True, dir_okay=False, help="JSON file of rows."
    ),
    tags: bool = typer.Option(False, "--tags", help="Show every form instance tag."),
    as_json: bool = typer.Option(False, "--json", help="Print the page as JSON."),
) -> None:
    """
    Render one page of the worklist.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    source = _build_source(endpoint or settings.api_endpoint, data_file, tags)
    controller = WorklistController(demo_columns(tags), source, page_size=page_size)
    controller.state = QueryState(
        filters=_parse_filters(filters),
        sort=SortState(key=sort, direction=SortDirection.DESC if desc else SortDirection.ASC),
        search=search,
    )
    asyncio.run(controller.refresh())
    controller.set_page(page)

    if as_json:
        result = controller.current_page()
        typer.echo(
            json.dumps(
                {
                    "rows": result.rows,
                    "total_count": result.total_count,
                    "page": result.page,
                    "page_size": result.page_size,
                    "error": controller.error,
                },
                indent=2,
                default=str,
            )
        )
    else:
        print_worklist(controller, Console())
    if controller.error:
        raise typer.Exit(code=1)


@app.command()
def segment(
    q1c: int = typer.Option(..., "--q1c", min=1, max=7),
    q1d: int = typer.Option(..., "--q1d", min=1, max=7),
    q1e: int = typer.Option(..., "--q1e", min=1, max=7),
    q1g: int = typer.Option(..., "--q1g", min=1, max=7),
    q1h: int = typer.Option(..., "--q1h", min=1, max=7),
    q1i: int = typer.Option(..., "--q1i", min=1, max=7),
    first_name: str = typer.Option("", "--first-name"),
    last_name: str = typer.Option("", "--last-name"),
    email: Optional[str] = typer.Option(None, "--email", help="Send the result to this address."),
) -> None:
    """
    Compute the patient segment from the six scored answers.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    answers = dict(zip(QUESTION_IDS, (q1c, q1d, q1e, q1g, q1h, q1i)))
    try:
        result = calculate_segment(answers)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console = Console()
    table = Table(title=f"Segment {result.segment}: {result.segment_name}")
    table.add_column("Segment", justify="right", style="cyan")
    table.add_column("Score", justify="right", style="green")
    for number, score in result.scores.items():
        marker = " *" if number == result.segment else ""
        table.add_row(f"{number}{marker}", f"{score:.2f}")
    console.print(table)

    if email:
        user = UserInfo(first_name=first_name, last_name=last_name, email=email)
        outcome = asyncio.run(send_results_email(user, result))
        if outcome.success:
            typer.echo(f"Email sent ({outcome.message_id}).")
        else:
            typer.echo(f"Email not sent: {outcome.error}", err=True)
            typer.echo(generate_email_content(user, result))
            raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        sys.exit(2)


if __name__ == "__main__":
    main()
