"""Apply a rating update feed to a master roster workbook."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook, load_workbook

from exporters.update_feed import RatingUpdate

NAME_HEADER = "姓名"
RATING_HEADER = "等级分"
HEADER_ROW_INDEX = 1
DEFAULT_OUTPUT_NAME = "Updated_Rankings.xlsx"

_WHITESPACE = re.compile(r"\s")


class RosterFormatError(ValueError):
    """Raised when a roster workbook does not have the expected layout."""


@dataclass(frozen=True)
class RosterUpdateResult:
    sheet_name: str
    updated: tuple[str, ...]
    not_found: tuple[str, ...]
    rows: tuple[tuple[object, ...], ...]


def _normalize_header(value: object) -> str:
    return _WHITESPACE.sub("", "" if value is None else str(value)).strip()


def _cell_text(value: object) -> str:
    return "" if value is None else str(value).strip()


def _sort_key(row: Sequence[object], rating_index: int) -> float:
    value = row[rating_index] if rating_index < len(row) else None
    if value is None:
        return 0.0
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


def _coerce_rating(value: str) -> object:
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def apply_updates_to_rows(
    rows: Sequence[Sequence[object]],
    updates: Sequence[RatingUpdate],
    *,
    sheet_name: str = "Sheet1",
) -> RosterUpdateResult:
    """Update ratings by exact name match and sort data rows by rating, highest first.

    Row 1 is kept as the title row and row 2 is the header; data starts at row 3.
    When a name appears several times in ``updates`` the last line wins.
    """
    if len(rows) < HEADER_ROW_INDEX + 1:
        raise RosterFormatError("roster sheet needs a title row and a header row")

    header = [_normalize_header(cell) for cell in rows[HEADER_ROW_INDEX]]
    try:
        name_index = header.index(NAME_HEADER)
        rating_index = header.index(RATING_HEADER)
    except ValueError as exc:
        raise RosterFormatError(
            f"'{NAME_HEADER}' or '{RATING_HEADER}' column not found in header row; "
            f"detected headers: {' | '.join(header)}"
        ) from exc

    width = max(len(row) for row in rows)
    data_rows = [list(row) + [None] * (width - len(row)) for row in rows[HEADER_ROW_INDEX + 1 :]]

    latest: dict[str, str] = {}
    for update in updates:
        latest[update.name.strip()] = update.new_rating.strip()

    updated: list[str] = []
    not_found: list[str] = []
    for name, new_rating in latest.items():
        for row in data_rows:
            if _cell_text(row[name_index]) == name:
                row[rating_index] = _coerce_rating(new_rating)
                updated.append(name)
                break
        else:
            not_found.append(name)

    data_rows.sort(key=lambda row: _sort_key(row, rating_index), reverse=True)

    return RosterUpdateResult(
        sheet_name=sheet_name,
        updated=tuple(updated),
        not_found=tuple(not_found),
        rows=(
            tuple(rows[0]),
            tuple(rows[HEADER_ROW_INDEX]),
            *(tuple(row) for row in data_rows),
        ),
    )


def read_roster_rows(roster_path: Path) -> tuple[str, list[tuple[object, ...]]]:
    """Return the first sheet's name and its cell values."""
    workbook = load_workbook(roster_path, data_only=True)
    worksheet = workbook.worksheets[0]
    rows = [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    return worksheet.title, rows


def write_roster(result: RosterUpdateResult, output_path: Path) -> None:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = result.sheet_name
    for row in result.rows:
        worksheet.append(list(row))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)


def apply_rating_updates(
    roster_path: Path,
    updates: Sequence[RatingUpdate],
    output_path: Path,
) -> RosterUpdateResult:
    """Apply ``updates`` to the roster at ``roster_path`` and save the sorted sheet."""
    sheet_name, rows = read_roster_rows(roster_path)
    result = apply_updates_to_rows(rows, updates, sheet_name=sheet_name)
    write_roster(result, output_path)
    return result


__all__ = [
    "DEFAULT_OUTPUT_NAME",
    "RosterFormatError",
    "RosterUpdateResult",
    "apply_rating_updates",
    "apply_updates_to_rows",
    "read_roster_rows",
    "write_roster",
]
