#!/usr/bin/env python3
"""Calculate rating changes for round-robin groups and export the results."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.pipeline import calculate_groups
from domain.ratings.calculator import RatingParameters
from domain.ratings.config import (
    DEFAULT_OUTPUT_NAME,
    load_rating_system_config,
    load_rating_system_configs,
)
from exporters.update_feed import write_update_feed
from exporters.workbook import write_workbook
from repositories.group_repository import read_group_files

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Round-robin rating calculation jobs.",
)


def _resolve_parameters(
    *,
    config_path: Path | None,
    rounds: int | None,
    points_per_round: float | None,
    output_name: str | None,
) -> tuple[RatingParameters, str]:
    base = RatingParameters()
    base_output_name = DEFAULT_OUTPUT_NAME
    if config_path is not None:
        config = load_rating_system_config(config_path)
        base = config.parameters
        base_output_name = config.output_name

    params = RatingParameters(
        round_count=base.round_count if rounds is None else rounds,
        points_per_round=base.points_per_round if points_per_round is None else points_per_round,
    )
    if params.round_count < 1:
        raise typer.BadParameter("--rounds must be >= 1", param_hint="--rounds")
    if params.points_per_round <= 0:
        raise typer.BadParameter(
            "--points-per-round must be greater than 0",
            param_hint="--points-per-round",
        )

    resolved_output_name = (output_name or "").strip() or base_output_name
    return params, resolved_output_name


@app.command()
def calculate(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Group files, one comma-separated player line per row.",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Optional TOML config supplying rounds, points per round and output name.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    rounds: Annotated[
        int | None,
        typer.Option("--rounds", help="Number of rounds played (overrides config)."),
    ] = None,
    points_per_round: Annotated[
        float | None,
        typer.Option("--points-per-round", help="Points awarded per round (overrides config)."),
    ] = None,
    output_name: Annotated[
        str | None,
        typer.Option("--output-name", help="Base name for the .xlsx and .txt outputs."),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", help="Directory receiving the outputs.", file_okay=False),
    ] = Path("."),
    workers: Annotated[
        int,
        typer.Option("--workers", help="Number of groups computed concurrently."),
    ] = 1,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute ratings without writing output files."),
    ] = False,
) -> None:
    """Compute every group independently and export one workbook plus an update feed."""
    if workers <= 0:
        raise typer.BadParameter("--workers must be greater than 0", param_hint="--workers")

    params, resolved_output_name = _resolve_parameters(
        config_path=config_path,
        rounds=rounds,
        points_per_round=points_per_round,
        output_name=output_name,
    )

    groups = read_group_files(files, params.round_count)
    typer.echo(
        f"loaded_groups={len(groups)} "
        f"rounds={params.round_count} "
        f"full_mark={params.full_mark:g}"
    )

    summary = calculate_groups(groups, params, max_workers=workers, echo=typer.echo)
    if summary.processed_groups == 0:
        typer.echo("No valid player rows found in the imported files.", err=True)
        raise typer.Exit(code=1)

    if dry_run:
        for result in summary.results:
            for row in result.rows:
                typer.echo(
                    f"[dry-run] group={result.name} {row.seq:2d}. {row.name:<12} "
                    f"rating={row.rating} expected={row.expected_score:.1f} "
                    f"change={row.rating_change:+.1f} final={row.final_rating}"
                )
        typer.echo(
            f"[dry-run] processed_groups={summary.processed_groups} "
            f"processed_players={summary.processed_players}"
        )
        return

    workbook_path = output_dir / f"{resolved_output_name}.xlsx"
    feed_path = output_dir / f"{resolved_output_name}.txt"
    sheet_names = write_workbook(summary.results, workbook_path, round_count=params.round_count)
    feed_written = write_update_feed(summary.results, feed_path)

    typer.echo(
        "completed "
        f"processed_groups={summary.processed_groups} "
        f"skipped_groups={summary.skipped_groups} "
        f"processed_players={summary.processed_players} "
        f"dropped_rows={summary.dropped_rows} "
        f"sheets={','.join(sheet_names)}"
    )
    typer.echo(f"workbook={workbook_path}")
    if feed_written:
        typer.echo(f"update_feed={feed_path}")


@app.command()
def list_configs(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of rating TOML configs."),
    ] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print every rating config found in a directory."""
    configs = load_rating_system_configs(config_dir)
    for config in configs:
        values = " ".join(f"{key}={value}" for key, value in config.as_config_json().items())
        typer.echo(f"{config.name} file={config.file_path.name} {values}")


if __name__ == "__main__":
    app()
