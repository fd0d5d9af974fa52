"""
ExcelWriter — builder for the styled metrics workbook.
"""
from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from cashpulse.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    GAIN_KPI_FONT, LOSS_KPI_FONT, KPI_VALUE_FONT,
    AREA_TITLE_FONT, AREA_BODY_FONT, PRIORITY_FILLS, WRAP,
)
from cashpulse.excel.formatters import (
    format_header_row, format_data_cell, auto_column_width, add_kpi_card,
)


ColSpec = tuple[str, str, str]  # (key, col_type, label)
KpiSpec = tuple[object, str, str]  # (value, label, format_type)


class ExcelWriter:
    """Fluent builder for styled workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    def add_sheet(self, title: str) -> Worksheet:
        """New worksheet; the workbook's default sheet is reused for the first one."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
            return ws
        return self.wb.create_sheet(title=title)

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, merge_cols: int = 6) -> int:
        """Title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1, value=title).font = TITLE_FONT
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)
        ws.cell(row=2, column=1, value=subtitle).font = SUBTITLE_FONT
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)
        for col in range(1, merge_cols + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[KpiSpec], col_spacing: int = 2,
                      signed: bool = False) -> int:
        """A row of KPI cards. With signed=True values are coloured by sign."""
        col = 1
        for value, label, fmt in kpis:
            font = KPI_VALUE_FONT
            if signed and isinstance(value, (int, float)):
                font = GAIN_KPI_FONT if value >= 0 else LOSS_KPI_FONT
            add_kpi_card(ws, row, col, value, label, fmt, font=font)
            col += col_spacing
        return row + 3

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[dict],
        show_total: bool = False,
        total_label: str = "TOTAL",
    ) -> int:
        """Header + data rows (+ optional summed total row). Returns the row after the table."""
        format_header_row(ws, start_row, [label for _, _, label in columns])

        row = start_row + 1
        for row_data in rows:
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                format_data_cell(ws, row, col_num, row_data.get(key, 0), col_type)
            row += 1

        if show_total and rows:
            format_data_cell(ws, row, 1, total_label, "text", is_total=True)
            for col_num, (key, col_type, _) in enumerate(columns[1:], 2):
                if col_type in ("currency", "number"):
                    total = sum(r.get(key, 0) for r in rows)
                    format_data_cell(ws, row, col_num, total, col_type, is_total=True)
                else:
                    format_data_cell(ws, row, col_num, "", "text", is_total=True)
            row += 1

        auto_column_width(ws)
        ws.freeze_panes = f"A{start_row + 1}"
        return row

    # ------------------------------------------------------------------
    # Target areas
    # ------------------------------------------------------------------

    def write_target_areas(self, ws: Worksheet, start_row: int, areas: list[dict], merge_cols: int = 6) -> int:
        """One block per target area, shaded by priority. Returns next row."""
        row = start_row
        if not areas:
            ws.cell(row=row, column=1, value="All systems operational").font = AREA_BODY_FONT
            return row + 2

        for area in areas:
            title = ws.cell(row=row, column=1, value=f"[{area['priority'].upper()}] {area['category']}")
            title.font = AREA_TITLE_FONT
            if area["priority"] in PRIORITY_FILLS:
                title.fill = PRIORITY_FILLS[area["priority"]]
            body = ws.cell(row=row + 1, column=1, value=area["issue"])
            body.font = AREA_BODY_FONT
            body.alignment = WRAP
            ws.merge_cells(start_row=row + 1, start_column=1, end_row=row + 1, end_column=merge_cols)
            ws.cell(row=row + 2, column=1, value=f"  → {area['recommendation']}").font = AREA_BODY_FONT
            ws.merge_cells(start_row=row + 2, start_column=1, end_row=row + 2, end_column=merge_cols)
            row += 4
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
