"""Unit tests for the round-robin group rating calculator."""

from __future__ import annotations

import pytest

from domain.common import PlayerRecord
from domain.ratings.calculator import (
    GroupRatingCalculator,
    RatingParameters,
    compute_group,
    round_half_up,
    summarize_opponents,
)


def _player(
    name: str,
    rating: int,
    tokens: tuple[str, ...],
    *,
    k_factor: int = 20,
    total_score: float = 0.0,
) -> PlayerRecord:
    return PlayerRecord(
        name=name,
        rating=rating,
        k_factor=k_factor,
        round_tokens=tokens,
        total_score=total_score,
    )


def _even_group() -> list[PlayerRecord]:
    return [
        _player("Alice", 1500, ("W2", "D3", "D4", "D5"), total_score=2.5),
        _player("Bob", 1500, ("L1", "D3", "D4", "D5"), total_score=1.5),
        _player("Carol", 1500, ("D1", "D2", "D4", "D5"), total_score=2.0),
        _player("Dan", 1500, ("D1", "D2", "D3", "D5"), total_score=2.0),
        _player("Eve", 1500, ("D1", "D2", "D3", "D4"), total_score=2.0),
    ]


def test_rating_parameters_defaults_and_full_mark() -> None:
    params = RatingParameters()
    assert params.round_count == 4
    assert params.points_per_round == pytest.approx(2.0)
    assert params.full_mark == pytest.approx(8.0)
    assert RatingParameters(round_count=5, points_per_round=1.0).full_mark == pytest.approx(5.0)


def test_even_field_win_gains_ten_points() -> None:
    rows = compute_group(_even_group(), RatingParameters(round_count=4, points_per_round=1.0))

    alice = rows[0]
    assert alice.avg_opponent_rating == 1500
    assert alice.expected_score == pytest.approx(2.0)
    assert alice.rating_change == pytest.approx(10.0)
    assert alice.final_rating == 1510

    bob = rows[1]
    assert bob.rating_change == pytest.approx(-10.0)
    assert bob.final_rating == 1490
    assert [row.final_rating for row in rows[2:]] == [1500, 1500, 1500]


def test_rows_preserve_input_order_and_sequence() -> None:
    players = [
        _player("Low", 1200, ("2",)),
        _player("High", 2000, ("1",)),
    ]
    rows = compute_group(players, RatingParameters(round_count=1))
    assert [row.seq for row in rows] == [1, 2]
    assert [row.name for row in rows] == ["Low", "High"]


def test_tagged_token_resolves_opponent_and_is_kept_for_display() -> None:
    players = [
        _player("Alice", 1500, ("W3",), total_score=1.0),
        _player("Bob", 1600, ("",)),
        _player("Carol", 1700, ("L1",)),
    ]
    row = compute_group(players, RatingParameters(round_count=1, points_per_round=2.0))[0]

    assert row.avg_opponent_rating == 1700
    assert row.round_tokens == ("W3",)
    # -200 gap -> 0.24 of a 2-point full mark
    assert row.expected_score == pytest.approx(0.5)


@pytest.mark.parametrize("bad_token", ["0", "abc", "9", "-1", ""])
def test_unresolvable_round_is_empty(bad_token: str) -> None:
    players = [
        _player("Alice", 1500, ("2", bad_token)),
        _player("Bob", 1600, ("1", "1")),
    ]
    summary = summarize_opponents(players[0], players, round_count=2)
    assert summary.empty_rounds == 1
    assert summary.total_rating == 1600
    assert summary.avg_rating == 1600


def test_short_token_list_counts_missing_rounds_as_empty() -> None:
    players = [
        _player("Alice", 1500, ("2",)),
        _player("Bob", 1600, ("1",)),
    ]
    summary = summarize_opponents(players[0], players, round_count=3)
    assert summary.empty_rounds == 2
    assert summary.avg_rating == 1600


def test_average_opponent_rating_rounds_up() -> None:
    players = [
        _player("Alice", 1500, ("2", "3")),
        _player("Bob", 1500, ("1", "")),
        _player("Carol", 1501, ("1", "")),
    ]
    summary = summarize_opponents(players[0], players, round_count=2)
    assert summary.avg_rating == 1501


def test_all_empty_rounds_average_to_zero() -> None:
    players = [_player("Solo", 1500, ("", "0", "7", "x"), k_factor=10, total_score=5.0)]
    row = compute_group(players, RatingParameters(round_count=4, points_per_round=2.0))[0]

    assert row.avg_opponent_rating == 0
    # a 1500 gap saturates to the full mark
    assert row.expected_score == pytest.approx(8.0)
    assert row.rating_change == pytest.approx(-30.0)
    assert row.final_rating == 1470


def test_self_reference_is_resolved_like_any_opponent() -> None:
    players = [_player("Alice", 1500, ("1",)), _player("Bob", 1700, ("1",))]
    summary = summarize_opponents(players[0], players, round_count=1)
    assert summary.avg_rating == 1500


def test_favourite_meeting_expectation_keeps_rating() -> None:
    players = [
        _player("Frank", 1600, ("2", "0", "", "W2"), k_factor=15, total_score=3.0),
        _player("Gina", 1400, ("L1", "", "", ""), k_factor=30, total_score=0.0),
    ]
    frank, gina = compute_group(players, RatingParameters(round_count=4, points_per_round=1.0))

    assert frank.avg_opponent_rating == 1400
    assert frank.expected_score == pytest.approx(3.0)
    assert frank.rating_change == pytest.approx(0.0)
    assert frank.final_rating == 1600

    assert gina.avg_opponent_rating == 1600
    assert gina.expected_score == pytest.approx(1.0)
    assert gina.rating_change == pytest.approx(-30.0)
    assert gina.final_rating == 1370


def test_small_gap_expectation_rounds_to_one_decimal() -> None:
    players = [
        _player("Alice", 1500, ("2",), k_factor=15, total_score=0.5),
        _player("Bob", 1507, ("1",), k_factor=15, total_score=0.5),
    ]
    alice, bob = compute_group(players, RatingParameters(round_count=1, points_per_round=1.0))
    # gap 7 -> 0.49 / 0.51, rounded to 0.5 either way
    assert alice.expected_score == pytest.approx(0.5)
    assert alice.rating_change == pytest.approx(0.0)
    assert bob.expected_score == pytest.approx(0.5)


def test_rating_change_is_reported_to_one_decimal() -> None:
    players = [
        _player("Alice", 1500, ("2",), k_factor=15, total_score=2.3),
        _player("Bob", 1500, ("1",), k_factor=15, total_score=1.7),
    ]
    alice, bob = compute_group(players, RatingParameters(round_count=1, points_per_round=4.0))
    assert alice.expected_score == pytest.approx(2.0)
    assert alice.rating_change == 4.5
    assert alice.final_rating == 1505
    assert bob.rating_change == -4.5


def test_expectation_just_below_a_half_step_rounds_down() -> None:
    # 5 * 0.51 is stored just below 2.55
    players = [
        _player("Alice", 1507, ("2",) * 5, k_factor=20, total_score=2.5),
        _player("Bob", 1500, ("1",) * 5, k_factor=20, total_score=2.5),
    ]
    alice = compute_group(players, RatingParameters(round_count=5, points_per_round=1.0))[0]
    assert alice.expected_score == 2.5
    assert alice.rating_change == 0.0
    assert alice.final_rating == 1507


def test_final_rating_rounds_halves_up() -> None:
    assert round_half_up(1499.5) == 1500
    assert round_half_up(1500.49) == 1500
    assert round_half_up(-0.5) == 0
    assert round_half_up(0.49999999999999994) == 0
    players = [
        _player("Alice", 1500, ("2",), k_factor=1, total_score=0.0),
        _player("Bob", 1500, ("1",), k_factor=1, total_score=1.0),
    ]
    alice, bob = compute_group(players, RatingParameters(round_count=1, points_per_round=1.0))
    assert alice.rating_change == pytest.approx(-0.5)
    assert alice.final_rating == 1500
    assert bob.final_rating == 1501


def test_compute_group_is_pure() -> None:
    players = _even_group()
    params = RatingParameters(round_count=4, points_per_round=1.0)
    first = compute_group(players, params)
    second = compute_group(players, params)
    assert first == second
    assert players == _even_group()


def test_compute_group_rejects_empty_input() -> None:
    with pytest.raises(ValueError, match="at least one player"):
        compute_group([], RatingParameters())


def test_calculator_validates_parameters() -> None:
    with pytest.raises(ValueError, match="round_count"):
        GroupRatingCalculator(RatingParameters(round_count=0))
    with pytest.raises(ValueError, match="points_per_round"):
        GroupRatingCalculator(RatingParameters(points_per_round=0.0))


def test_calculator_uses_bound_parameters() -> None:
    calculator = GroupRatingCalculator(RatingParameters(round_count=4, points_per_round=1.0))
    rows = calculator.process_group(_even_group())
    assert rows[0].final_rating == 1510
