"""Plain-text rating update feed (``name,old_rating,new_rating`` per line)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from domain.common import GroupResult


@dataclass(frozen=True)
class RatingUpdate:
    name: str
    old_rating: str
    new_rating: str


def format_update_feed(results: Iterable[GroupResult]) -> str:
    """Join one line per player across all groups, in group order."""
    return "\n".join(
        f"{row.name},{row.rating},{row.final_rating}"
        for result in results
        for row in result.rows
    )


def write_update_feed(results: Iterable[GroupResult], file_path: Path) -> bool:
    """Write the feed; nothing is written when there are no players."""
    content = format_update_feed(results)
    if not content:
        return False
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return True


def parse_update_feed(text: str) -> list[RatingUpdate]:
    """Parse feed lines, skipping blank lines and lines without three fields."""
    updates: list[RatingUpdate] = []
    for line in text.replace("\r", "").split("\n"):
        fields = [field.strip() for field in line.strip().split(",")]
        if len(fields) < 3 or not fields[0]:
            continue
        updates.append(RatingUpdate(name=fields[0], old_rating=fields[1], new_rating=fields[2]))
    return updates


__all__ = ["RatingUpdate", "format_update_feed", "parse_update_feed", "write_update_feed"]
