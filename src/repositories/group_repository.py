"""Read player groups from comma-separated text files."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from domain.common import PlayerGroup, PlayerRecord
from domain.ratings.tokens import parse_leading_int

_FIXED_FIELDS = 3


def is_valid_player_row(fields: Sequence[str]) -> bool:
    """A row needs a name, an integer rating and an integer K-factor."""
    if len(fields) < _FIXED_FIELDS + 1 or not fields[0].strip():
        return False
    return parse_leading_int(fields[1]) is not None and parse_leading_int(fields[2]) is not None


def split_player_lines(text: str) -> list[list[str]]:
    """Split raw file text into trimmed, non-empty comma-separated rows."""
    lines = (line.strip() for line in text.replace("\r", "").split("\n"))
    return [[field.strip() for field in line.split(",")] for line in lines if line]


def _parse_score(value: str | None) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


def build_player_record(fields: Sequence[str], round_count: int) -> PlayerRecord:
    """Convert a validated row into a record; missing round tokens become empty strings."""
    rating = parse_leading_int(fields[1])
    k_factor = parse_leading_int(fields[2])
    if rating is None or k_factor is None:
        raise ValueError(f"row {list(fields)!r} has no integer rating/K-factor")

    round_tokens = tuple(
        fields[_FIXED_FIELDS + index] if _FIXED_FIELDS + index < len(fields) else ""
        for index in range(round_count)
    )
    score_index = _FIXED_FIELDS + round_count
    total_score = _parse_score(fields[score_index] if score_index < len(fields) else None)

    return PlayerRecord(
        name=fields[0],
        rating=rating,
        k_factor=k_factor,
        round_tokens=round_tokens,
        total_score=total_score,
    )


def parse_players_from_text(
    text: str,
    round_count: int,
    *,
    name: str = "Group",
    source: Path | None = None,
) -> PlayerGroup:
    """Parse one group's text, dropping rows that fail validation."""
    rows = split_player_lines(text)
    valid_rows = [row for row in rows if is_valid_player_row(row)]
    players = tuple(build_player_record(row, round_count) for row in valid_rows)
    return PlayerGroup(
        name=name,
        source=source,
        players=players,
        dropped_rows=len(rows) - len(valid_rows),
    )


def read_group_file(file_path: Path, round_count: int) -> PlayerGroup:
    """Read one group file; the group name is the file name without extension."""
    text = file_path.read_text(encoding="utf-8-sig")
    return parse_players_from_text(
        text,
        round_count,
        name=file_path.stem,
        source=file_path,
    )


def read_group_files(file_paths: Iterable[Path], round_count: int) -> list[PlayerGroup]:
    """Read several group files, preserving the given order."""
    return [read_group_file(file_path, round_count) for file_path in file_paths]


__all__ = [
    "build_player_record",
    "is_valid_player_row",
    "parse_players_from_text",
    "read_group_file",
    "read_group_files",
    "split_player_lines",
]
