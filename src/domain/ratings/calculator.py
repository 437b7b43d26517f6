"""Round-robin group rating calculator."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import ceil, floor

from domain.common import ComputedRow, PlayerRecord
from domain.ratings.expected_score import expected_score, round1
from domain.ratings.tokens import parse_opponent_token


@dataclass(frozen=True)
class RatingParameters:
    round_count: int = 4
    points_per_round: float = 2.0

    @property
    def full_mark(self) -> float:
        """Maximum total score obtainable across all rounds."""
        return self.points_per_round * self.round_count


@dataclass(frozen=True)
class OpponentSummary:
    total_rating: int
    empty_rounds: int
    avg_rating: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(floor(value)) + (1 if value - floor(value) >= 0.5 else 0)


def summarize_opponents(
    player: PlayerRecord,
    players: Sequence[PlayerRecord],
    round_count: int,
) -> OpponentSummary:
    """Average the ratings of a player's resolvable round opponents.

    Unresolvable rounds (byes, bad tokens, out-of-range numbers) are counted
    as empty and excluded from the divisor; the average is rounded up.
    """
    total = 0
    empty = 0
    for round_index in range(round_count):
        token = player.round_tokens[round_index] if round_index < len(player.round_tokens) else None
        opponent_id = parse_opponent_token(token).opponent_id
        opponent_index = opponent_id - 1 if opponent_id else -1

        if 0 <= opponent_index < len(players):
            total += players[opponent_index].rating
        else:
            empty += 1

    divisor = round_count - empty
    avg_rating = ceil(total / divisor) if divisor > 0 else 0
    return OpponentSummary(total_rating=total, empty_rounds=empty, avg_rating=avg_rating)


def compute_group(players: Sequence[PlayerRecord], params: RatingParameters) -> list[ComputedRow]:
    """Compute rating changes for every player of one group, preserving input order."""
    if not players:
        raise ValueError("compute_group requires at least one player")

    rows: list[ComputedRow] = []
    for index, player in enumerate(players):
        summary = summarize_opponents(player, players, params.round_count)
        expected = round1(
            expected_score(player.rating, summary.avg_rating, params.full_mark)
        )
        change = (player.total_score - expected) * player.k_factor

        rows.append(
            ComputedRow(
                seq=index + 1,
                name=player.name,
                rating=player.rating,
                k_factor=player.k_factor,
                round_tokens=tuple(player.round_tokens[: params.round_count]),
                total_score=player.total_score,
                avg_opponent_rating=summary.avg_rating,
                expected_score=expected,
                rating_change=round1(change),
                final_rating=round_half_up(player.rating + change),
            )
        )
    return rows


class GroupRatingCalculator:
    """Stateless calculator bound to one run's tournament parameters."""

    def __init__(self, params: RatingParameters) -> None:
        if params.round_count < 1:
            raise ValueError("round_count must be >= 1")
        if params.points_per_round <= 0.0:
            raise ValueError("points_per_round must be > 0")
        self.params = params

    def process_group(self, players: Sequence[PlayerRecord]) -> list[ComputedRow]:
        return compute_group(players, self.params)


__all__ = [
    "GroupRatingCalculator",
    "OpponentSummary",
    "RatingParameters",
    "compute_group",
    "round_half_up",
    "summarize_opponents",
]
