"""
Metrics workbook — Summary / Monthly / Weekly / Expenses sheets from FinancialMetrics.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from cashpulse.excel.writer import ExcelWriter


SERIES_COLS = [
    ("period", "text", "Period"),
    ("revenue", "currency", "Revenue"),
    ("expenses", "currency", "Expenses"),
    ("net", "currency", "Net"),
]

EXPENSE_COLS = [
    ("category", "text", "Category"),
    ("amount", "currency", "Amount"),
    ("share", "percent", "% of Expenses"),
]

SEASONALITY_COLS = [
    ("month", "number", "Month #"),
    ("factor", "decimal", "Revenue Factor"),
]


def _series_rows(series: list[dict], key: str) -> list[dict]:
    return [
        {"period": s[key], "revenue": s["revenue"], "expenses": s["expenses"], "net": s["revenue"] - s["expenses"]}
        for s in series
    ]


def _expense_rows(metrics: dict) -> list[dict]:
    total = metrics["totalExpenses"]
    rows = sorted(metrics["expenseBreakdown"], key=lambda r: r["amount"], reverse=True)
    return [
        {"category": r["category"], "amount": r["amount"], "share": r["amount"] * 100 / total if total else 0.0}
        for r in rows
    ]


def generate_excel(metrics: dict, output_path: str | Path, title: str = "Financial Metrics") -> Path:
    """Write the metrics workbook and return its path."""
    ew = ExcelWriter()
    k = metrics["kpis"]
    t = metrics["trends"]

    # Summary
    ws = ew.add_sheet("Summary")
    row = ew.write_title(ws, title, f"Generated {datetime.now():%Y-%m-%d %H:%M}")
    row = ew.write_section(ws, row, "Cash Position")
    row = ew.write_kpi_row(ws, row, [
        (metrics["totalRevenue"], "Total Revenue", "currency"),
        (metrics["totalExpenses"], "Total Expenses", "currency"),
        (metrics["runway"], "Runway (months)", "decimal"),
    ])
    row = ew.write_kpi_row(ws, row, [
        (metrics["netCashFlow"], "Net Cash Flow", "currency"),
        (metrics["revenueGrowthRate"], "Revenue Growth %", "percent"),
        (metrics["expenseGrowthRate"], "Expense Growth %", "percent"),
    ], signed=True)

    row = ew.write_section(ws, row, "KPIs")
    row = ew.write_kpi_row(ws, row, [
        (k["grossMargin"], "Gross Margin", "percent"),
        (k["operatingMargin"], "Operating Margin", "percent"),
        (k["burnRate"], "Monthly Burn", "currency"),
    ])
    row = ew.write_kpi_row(ws, row, [
        (k["customerAcquisitionCost"], "CAC", "currency"),
        (k["averageRevenuePerUser"], "ARPU", "currency"),
        (k["churnRate"], "Churn", "percent"),
    ])

    row = ew.write_section(ws, row, "Trends")
    row = ew.write_kpi_row(ws, row, [
        (t["revenueDirection"].title(), "Revenue", "text"),
        (t["expenseDirection"].title(), "Expenses", "text"),
    ])

    row = ew.write_section(ws, row, "Target Areas")
    ew.write_target_areas(ws, row, metrics["targetAreas"])

    # Series
    ws = ew.add_sheet("Monthly")
    ew.write_table(ws, 1, SERIES_COLS, _series_rows(metrics["monthlyData"], "month"), show_total=True)
    if t["seasonality"]:
        start = len(metrics["monthlyData"]) + 4
        ew.write_table(ws, start, SEASONALITY_COLS, t["seasonality"])
        # Freeze only the top table
        ws.freeze_panes = "A2"

    ws = ew.add_sheet("Weekly")
    ew.write_table(ws, 1, SERIES_COLS, _series_rows(metrics["weeklyData"], "week"), show_total=True)

    ws = ew.add_sheet("Expenses")
    ew.write_table(ws, 1, EXPENSE_COLS, _expense_rows(metrics), show_total=True)

    return ew.save(output_path)
