"""Shared types for round-robin rating calculations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PlayerRecord:
    """One parsed input line; identity is the 1-based position in its group."""

    name: str
    rating: int
    k_factor: int
    round_tokens: tuple[str, ...]
    total_score: float


@dataclass(frozen=True)
class PlayerGroup:
    """Ordered players read from one input file."""

    name: str
    source: Path | None
    players: tuple[PlayerRecord, ...]
    dropped_rows: int = 0


@dataclass(frozen=True)
class ComputedRow:
    """Derived per-player result of one calculation pass."""

    seq: int
    name: str
    rating: int
    k_factor: int
    round_tokens: tuple[str, ...]
    total_score: float
    avg_opponent_rating: int
    expected_score: float
    rating_change: float
    final_rating: int


@dataclass(frozen=True)
class GroupResult:
    """Computed rows for one group, in input order."""

    name: str
    rows: tuple[ComputedRow, ...]


__all__ = ["ComputedRow", "GroupResult", "PlayerGroup", "PlayerRecord"]
