"""Rating calculation modules."""

from domain.ratings.calculator import (
    GroupRatingCalculator,
    RatingParameters,
    compute_group,
)
from domain.ratings.expected_score import EXPECTED_SCORE_BANDS, expected_score, round1
from domain.ratings.tokens import OpponentToken, parse_opponent_token

__all__ = [
    "EXPECTED_SCORE_BANDS",
    "GroupRatingCalculator",
    "OpponentToken",
    "RatingParameters",
    "compute_group",
    "expected_score",
    "parse_opponent_token",
    "round1",
]
