"""Styled Excel workbook export, one worksheet per group."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from domain.common import ComputedRow, GroupResult
from domain.ratings.tokens import parse_opponent_token
from exporters.sheet_names import make_unique_sheet_name, sanitize_sheet_name

TITLE_SUFFIX = "等级分比赛"

# Reference K-factor bands shown beside every table.
K_FACTOR_TABLE: tuple[tuple[str, int], ...] = (
    ("2000或以上", 10),
    ("1700-1999", 15),
    ("1550-1699", 20),
    ("1549或以下", 30),
)

LEGEND: tuple[tuple[str, str], ...] = (
    ("W", "W=WIN"),
    ("D", "D=DRAW"),
    ("L", "L=LOSE"),
)

# 1-based worksheet coordinates.
TITLE_ROW = 1
LEGEND_ROW = 3
LEGEND_FIRST_COLUMN = 5
K_TABLE_TOP = 2
K_TABLE_LEFT = 15
HEADER_ROW = 8
FIRST_DATA_ROW = HEADER_ROW + 1
MIN_TOTAL_COLUMNS = 16

BLACK = "FF000000"
FILL_RESULT = {"W": "FFFFE699", "D": "FFC6E0B4", "L": "FF9DC3E6"}
FILL_HEADER_GRAY = "FFE7E6E6"
FILL_HEADER_ORANGE = "FFF4B183"
FILL_HEADER_BLUE = "FFBDD7EE"
FILL_HEADER_YELLOW = "FFFFF2CC"
FILL_WHITE = "FFFFFFFF"
FONT_GAIN = "FF1F7A1F"
FONT_LOSS = "FFB00020"

_CENTER = Alignment(vertical="center", horizontal="center", wrap_text=True)
_THIN = Side(style="thin", color=BLACK)
_MEDIUM = Side(style="medium", color=BLACK)


def _font(*, bold: bool = False, size: int = 11, color: str = BLACK) -> Font:
    return Font(name="Calibri", size=size, bold=bold, color=color)


def _fill(argb: str) -> PatternFill:
    return PatternFill(fill_type="solid", fgColor=argb)


def _box_border(*, top: bool, bottom: bool, left: bool, right: bool) -> Border:
    """Thin border with medium sides where the cell sits on a table edge."""
    return Border(
        top=_MEDIUM if top else _THIN,
        bottom=_MEDIUM if bottom else _THIN,
        left=_MEDIUM if left else _THIN,
        right=_MEDIUM if right else _THIN,
    )


def header_labels(round_count: int) -> list[str]:
    return [
        "编号",
        "棋手",
        "等级分",
        "K值",
        *(f"第{index}轮" for index in range(1, round_count + 1)),
        "总得分",
        "平均对手等级分",
        "期望分",
        "变化",
        "最终等级分",
    ]


def row_values(row: ComputedRow, round_count: int) -> list[object]:
    tokens = list(row.round_tokens[:round_count])
    tokens.extend("" for _ in range(round_count - len(tokens)))
    return [
        row.seq,
        row.name,
        row.rating,
        row.k_factor,
        *tokens,
        row.total_score,
        row.avg_opponent_rating,
        row.expected_score,
        row.rating_change,
        row.final_rating,
    ]


def sheet_title(group_name: str) -> str:
    return f"{group_name or ''} {TITLE_SUFFIX}".strip()


def render_group_sheet(
    worksheet: Worksheet,
    result: GroupResult,
    *,
    title: str,
    round_count: int,
) -> None:
    """Lay out and style one group's table, legend and K-factor reference."""
    labels = header_labels(round_count)
    main_columns = len(labels)
    total_columns = max(main_columns, MIN_TOTAL_COLUMNS)
    last_data_row = FIRST_DATA_ROW + len(result.rows) - 1
    table_bottom = max(HEADER_ROW, last_data_row)

    _set_column_widths(worksheet, round_count=round_count, total_columns=total_columns)

    title_cell = worksheet.cell(row=TITLE_ROW, column=1, value=sheet_title(title))
    title_cell.font = _font(bold=True, size=16)
    title_cell.alignment = Alignment(vertical="center", horizontal="left")
    worksheet.merge_cells(
        start_row=TITLE_ROW,
        start_column=1,
        end_row=TITLE_ROW,
        end_column=max(1, main_columns),
    )

    for offset, (marker, text) in enumerate(LEGEND):
        cell = worksheet.cell(row=LEGEND_ROW, column=LEGEND_FIRST_COLUMN + offset, value=text)
        cell.font = _font(bold=True)
        cell.alignment = _CENTER
        cell.fill = _fill(FILL_RESULT[marker])
        cell.border = _box_border(top=False, bottom=False, left=False, right=False)

    _render_k_factor_table(worksheet)

    for column, label in enumerate(labels, start=1):
        cell = worksheet.cell(row=HEADER_ROW, column=column, value=label)
        if column == 3:
            header_fill = FILL_HEADER_ORANGE
        elif 5 <= column < 5 + round_count:
            header_fill = FILL_HEADER_YELLOW
        elif column == main_columns:
            header_fill = FILL_HEADER_BLUE
        else:
            header_fill = FILL_HEADER_GRAY
        cell.fill = _fill(header_fill)
        cell.font = _font(bold=True)
        cell.alignment = _CENTER

    round_columns = range(5, 5 + round_count)
    change_column = 8 + round_count
    for row_index, computed in enumerate(result.rows, start=FIRST_DATA_ROW):
        for column, value in enumerate(row_values(computed, round_count), start=1):
            cell = worksheet.cell(row=row_index, column=column, value=value)
            cell.alignment = _CENTER
            cell.font = _font()
            cell.fill = _fill(FILL_WHITE)

            if column in round_columns:
                marker = parse_opponent_token(str(value)).result
                if marker is not None:
                    cell.fill = _fill(FILL_RESULT[marker])
            elif column == change_column:
                cell.number_format = "0.0"
                if computed.rating_change > 0:
                    cell.font = _font(bold=True, color=FONT_GAIN)
                elif computed.rating_change < 0:
                    cell.font = _font(bold=True, color=FONT_LOSS)
            elif column == change_column - 1:
                cell.number_format = "0.0"

    for row_index in range(HEADER_ROW, table_bottom + 1):
        for column in range(1, main_columns + 1):
            worksheet.cell(row=row_index, column=column).border = _box_border(
                top=row_index == HEADER_ROW,
                bottom=row_index == table_bottom,
                left=column == 1,
                right=column == main_columns,
            )


def _render_k_factor_table(worksheet: Worksheet) -> None:
    rows = [("等级分", "K值"), *K_FACTOR_TABLE]
    bottom = K_TABLE_TOP + len(rows) - 1
    right = K_TABLE_LEFT + 1
    for row_offset, values in enumerate(rows):
        row_index = K_TABLE_TOP + row_offset
        is_header = row_offset == 0
        for column_offset, value in enumerate(values):
            column = K_TABLE_LEFT + column_offset
            cell = worksheet.cell(row=row_index, column=column, value=value)
            cell.font = _font(bold=is_header)
            cell.alignment = _CENTER
            cell.fill = _fill(FILL_HEADER_GRAY if is_header else FILL_WHITE)
            cell.border = _box_border(
                top=row_index == K_TABLE_TOP,
                bottom=row_index == bottom,
                left=column == K_TABLE_LEFT,
                right=column == right,
            )


def _set_column_widths(worksheet: Worksheet, *, round_count: int, total_columns: int) -> None:
    widths = {1: 6, 2: 12, 3: 8, 4: 6}
    for column in range(5, 5 + round_count):
        widths[column] = 6
    widths[5 + round_count] = 8
    widths[6 + round_count] = 14
    widths[7 + round_count] = 8
    widths[8 + round_count] = 8
    widths[9 + round_count] = 10
    for column in range(len(widths) + 1, total_columns + 1):
        widths.setdefault(column, 12)
    widths[K_TABLE_LEFT] = 12
    widths[K_TABLE_LEFT + 1] = 6

    for column, width in widths.items():
        worksheet.column_dimensions[get_column_letter(column)].width = width


def build_workbook(results: Sequence[GroupResult], *, round_count: int) -> Workbook:
    """Build one workbook holding a styled sheet per non-empty group."""
    workbook = Workbook()
    workbook.remove(workbook.active)

    used_names: set[str] = set()
    for result in results:
        if not result.rows:
            continue
        base_name = sanitize_sheet_name(result.name)
        worksheet = workbook.create_sheet(title=make_unique_sheet_name(base_name, used_names))
        render_group_sheet(worksheet, result, title=base_name, round_count=round_count)

    return workbook


def write_workbook(
    results: Sequence[GroupResult],
    file_path: Path,
    *,
    round_count: int,
) -> list[str]:
    """Save the workbook and return its sheet names; nothing is written without rows."""
    workbook = build_workbook(results, round_count=round_count)
    if not workbook.sheetnames:
        return []
    file_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(file_path)
    return list(workbook.sheetnames)


__all__ = [
    "K_FACTOR_TABLE",
    "build_workbook",
    "header_labels",
    "render_group_sheet",
    "row_values",
    "sheet_title",
    "write_workbook",
]
