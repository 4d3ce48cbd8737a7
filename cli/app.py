from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional

import typer

from cli.render import echo_json, render_lines, render_summary
from logging_config import configure_logging
from models.schemas import QueryName, QueryResult, StoreSummary
from services.queries import QueryEngine, build_default_engine
from services.record_store import RecordParseError, RecordStore
from settings import Settings, get_settings

_DATE_FORMATS = ["%Y-%m-%d"]


@dataclass
class CLIState:
    settings: Settings
    data_path: Optional[Path]
    store: Optional[RecordStore] = None


app = typer.Typer(
    help="Query temperature readings recorded by a weather station.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _load_store(state: CLIState) -> RecordStore:
    if state.store is not None:
        return state.store
    if state.data_path is None:
        raise typer.BadParameter(
            "No data file given; pass --data or set WEATHER_DATA_PATH.",
            param_hint="'--data'",
        )
    try:
        state.store = RecordStore.from_path(state.data_path)
    except RecordParseError as exc:
        typer.secho(f"Failed to parse {state.data_path}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except OSError as exc:
        typer.secho(f"Failed to read {state.data_path}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state.store


def _run_query(
    ctx: typer.Context,
    query: QueryName,
    date_from: datetime,
    date_to: datetime,
    as_json: bool,
    select: Callable[[QueryEngine], Callable[[date, date], List[str]]],
) -> None:
    state = _get_state(ctx)
    engine = build_default_engine(_load_store(state))
    start, end = date_from.date(), date_to.date()
    lines = select(engine)(start, end)
    if as_json:
        echo_json(QueryResult(query=query, date_from=start, date_to=end, lines=lines))
        return
    render_lines(lines)


@app.callback()
def main(
    ctx: typer.Context,
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Semicolon separated readings file (defaults to WEATHER_DATA_PATH env).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    settings = get_settings()
    configure_logging(log_level)
    data_path = data
    if data_path is None and settings.data_path:
        data_path = Path(settings.data_path)
    ctx.obj = CLIState(settings=settings, data_path=data_path)


@app.command("average")
def average_command(
    ctx: typer.Context,
    date_from: datetime = typer.Argument(..., formats=_DATE_FORMATS, help="First date, inclusive."),
    date_to: datetime = typer.Argument(..., formats=_DATE_FORMATS, help="Last date, inclusive."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Average temperature for each date in the range."""
    _run_query(ctx, QueryName.average, date_from, date_to, as_json, lambda e: e.average_temperatures)


@app.command("missing")
def missing_command(
    ctx: typer.Context,
    date_from: datetime = typer.Argument(..., formats=_DATE_FORMATS, help="First date, inclusive."),
    date_to: datetime = typer.Argument(..., formats=_DATE_FORMATS, help="Last date, inclusive."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Missing hourly readings per date, most incomplete first."""
    _run_query(ctx, QueryName.missing, date_from, date_to, as_json, lambda e: e.missing_values)


@app.command("approved")
def approved_command(
    ctx: typer.Context,
    date_from: datetime = typer.Argument(..., formats=_DATE_FORMATS, help="First date, inclusive."),
    date_to: datetime = typer.Argument(..., formats=_DATE_FORMATS, help="Last date, inclusive."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Percentage of approved readings across the range."""
    _run_query(ctx, QueryName.approved, date_from, date_to, as_json, lambda e: e.approved_values)


@app.command("summary")
def summary_command(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Emit the summary as JSON."),
) -> None:
    """Show how many readings and dates the data file holds."""
    state = _get_state(ctx)
    store = _load_store(state)
    summary = StoreSummary(
        source=str(state.data_path),
        reading_count=store.reading_count,
        date_count=len(store),
        first_date=store.first_date,
        last_date=store.last_date,
    )
    if as_json:
        echo_json(summary)
        return
    render_summary(summary)
