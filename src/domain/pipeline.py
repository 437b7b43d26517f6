"""Calculation pipeline across independent player groups."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from domain.common import GroupResult, PlayerGroup
from domain.ratings.calculator import GroupRatingCalculator, RatingParameters


@dataclass(frozen=True)
class CalculationSummary:
    """Outcome for one calculation run."""

    results: tuple[GroupResult, ...]
    processed_groups: int
    skipped_groups: int
    processed_players: int
    dropped_rows: int


def calculate_groups(
    groups: Sequence[PlayerGroup],
    params: RatingParameters,
    *,
    max_workers: int = 1,
    echo: Callable[[str], None] | None = None,
) -> CalculationSummary:
    """Compute every non-empty group; results follow the submission order."""
    if max_workers <= 0:
        raise ValueError("max_workers must be greater than 0")

    calculator = GroupRatingCalculator(params)
    active_groups: list[PlayerGroup] = []
    for group in groups:
        if not group.players:
            if echo is not None:
                echo(f"skipped group={group.name} reason=no_valid_rows dropped_rows={group.dropped_rows}")
            continue
        active_groups.append(group)

    def _compute(group: PlayerGroup) -> GroupResult:
        return GroupResult(name=group.name, rows=tuple(calculator.process_group(group.players)))

    if max_workers == 1 or len(active_groups) <= 1:
        results = [_compute(group) for group in active_groups]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_compute, active_groups))

    if echo is not None:
        for group, result in zip(active_groups, results):
            echo(
                f"group={result.name} "
                f"players={len(result.rows)} "
                f"dropped_rows={group.dropped_rows}"
            )

    return CalculationSummary(
        results=tuple(results),
        processed_groups=len(results),
        skipped_groups=len(groups) - len(active_groups),
        processed_players=sum(len(result.rows) for result in results),
        dropped_rows=sum(group.dropped_rows for group in groups),
    )


__all__ = ["CalculationSummary", "calculate_groups"]
