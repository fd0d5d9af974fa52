"""
Cell-level formatting helpers for the metrics workbook.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from cashpulse.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, TOTAL_FONT, TOTAL_FILL, TOTAL_BORDER, THIN_BORDER, STRIPE_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT, NUMBER_FORMATS,
)

NUMERIC_TYPES = ("currency", "number", "percent", "decimal")


def format_header_row(ws: Worksheet, row_num: int, labels: list[str]) -> None:
    """Write header labels across a row and style them."""
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row_num, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    is_total: bool = False,
) -> None:
    """Write and format a single data cell."""
    cell = ws.cell(row=row_num, column=col_num, value=value)
    cell.font = TOTAL_FONT if is_total else DATA_FONT
    cell.border = TOTAL_BORDER if is_total else THIN_BORDER
    cell.alignment = RIGHT if col_type in NUMERIC_TYPES else LEFT
    if col_type in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[col_type]

    if is_total:
        cell.fill = TOTAL_FILL
    elif row_num % 2 == 0:
        cell.fill = STRIPE_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 60) -> None:
    """Fit each column to its longest rendered value."""
    for column in ws.columns:
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        letter = get_column_letter(column[0].column)
        ws.column_dimensions[letter].width = min(max(longest + 2, min_width), max_width)


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, format_type: str = "currency",
                 font=KPI_VALUE_FONT) -> None:
    """Large KPI value with a small label underneath."""
    value_cell = ws.cell(row=row, column=col, value=value)
    value_cell.font = font
    value_cell.alignment = CENTER
    if format_type == "currency":
        value_cell.number_format = '"$"#,##0'
    elif format_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[format_type]

    label_cell = ws.cell(row=row + 1, column=col, value=label)
    label_cell.font = KPI_LABEL_FONT
    label_cell.alignment = CENTER
