#!/usr/bin/env python3
"""Apply a rating update feed to the master roster workbook."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from exporters.update_feed import parse_update_feed
from repositories.roster_repository import (
    DEFAULT_OUTPUT_NAME,
    RosterFormatError,
    apply_rating_updates,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Master roster update jobs.",
)


@app.command()
def apply(
    roster: Annotated[
        Path,
        typer.Argument(help="Roster workbook (.xlsx) with the header on row 2.", exists=True, dir_okay=False),
    ],
    feed: Annotated[
        Path,
        typer.Argument(help="Update feed produced by calculate_ratings.py.", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", help="Path of the updated, rating-sorted workbook."),
    ] = Path(DEFAULT_OUTPUT_NAME),
) -> None:
    """Write new ratings into the roster and re-sort it by rating."""
    updates = parse_update_feed(feed.read_text(encoding="utf-8-sig"))
    if not updates:
        typer.echo(f"No update lines found in {feed}", err=True)
        raise typer.Exit(code=1)

    try:
        result = apply_rating_updates(roster, updates, output)
    except RosterFormatError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"completed sheet={result.sheet_name} "
        f"updated={len(result.updated)} "
        f"not_found={len(result.not_found)} "
        f"output={output}"
    )
    for name in result.not_found:
        typer.echo(f"not_found name={name}")


if __name__ == "__main__":
    app()
