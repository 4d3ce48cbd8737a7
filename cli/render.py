from __future__ import annotations

from typing import Any, Iterable

import typer
from pydantic import BaseModel

from models.schemas import StoreSummary


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def echo_json(model: BaseModel) -> None:
    typer.echo(model.model_dump_json(indent=2))


def render_lines(lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(line)


def render_summary(summary: StoreSummary) -> None:
    echo_heading("Record Store")
    echo_key_values(
        [
            ("source", summary.source),
            ("reading_count", summary.reading_count),
            ("date_count", summary.date_count),
            ("first_date", summary.first_date or "n/a"),
            ("last_date", summary.last_date or "n/a"),
        ]
    )
