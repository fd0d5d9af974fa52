"""
Metrics engine — transactions → FinancialMetrics.

A pure function over the full transaction collection: totals, runway,
expense breakdown, monthly/weekly series, KPIs, trends, target areas,
growth rates. Recomputed on every request; nothing is cached.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd

from cashpulse.config import (
    COGS_CATEGORIES, MARKETING_KEYWORD, MONTHS_PER_YEAR,
    CAC_TRANSACTIONS_PER_CUSTOMER, ARPU_TRANSACTIONS_PER_USER, CHURN_RATE_PLACEHOLDER,
)
from cashpulse.data.schemas import Transaction
from cashpulse.analytics.common import safe_divide, pct_change, sanitize_for_json
from cashpulse.analytics.trends import identify_trends, STABLE
from cashpulse.analytics.recommendations import identify_target_areas


# ---------------------------------------------------------------------------
# Empty value
# ---------------------------------------------------------------------------

def empty_metrics() -> dict:
    """The canonical metrics value for a user with no transactions."""
    return {
        "totalRevenue": 0.0,
        "totalExpenses": 0.0,
        "netCashFlow": 0.0,
        "runway": 0.0,
        "revenueGrowthRate": 0.0,
        "expenseGrowthRate": 0.0,
        "monthlyData": [],
        "weeklyData": [],
        "expenseBreakdown": [],
        "kpis": {
            "grossMargin": 0.0,
            "operatingMargin": 0.0,
            "burnRate": 0.0,
            "customerAcquisitionCost": 0.0,
            "averageRevenuePerUser": 0.0,
            "churnRate": 0.0,
        },
        "trends": {
            "revenueDirection": STABLE,
            "expenseDirection": STABLE,
            "seasonality": [],
        },
        "targetAreas": [],
    }


# ---------------------------------------------------------------------------
# Frame construction
# ---------------------------------------------------------------------------

def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """One row per transaction with revenue/expenses split into columns."""
    rows = [
        {
            "date": t.date,
            "category": t.category,
            "amount": float(t.amount),
            "is_income": t.is_income,
        }
        for t in transactions
    ]
    df = pd.DataFrame(rows, columns=["date", "category", "amount", "is_income"])
    df["revenue"] = df["amount"].where(df["is_income"], 0.0)
    df["expenses"] = df["amount"].where(~df["is_income"], 0.0)

    dates = pd.to_datetime(df["date"])
    df["month"] = dates.dt.strftime("%Y-%m")
    # Sunday-aligned week start: dayofweek is Mon=0, so Sunday → 0 days back
    offset = pd.to_timedelta((dates.dt.dayofweek + 1) % 7, unit="D")
    df["week_start"] = (dates - offset).dt.strftime("%Y-%m-%d")
    return df


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------

def expense_breakdown(df: pd.DataFrame) -> list[dict]:
    """Expense total per category, in first-seen order."""
    expenses = df[~df["is_income"]]
    grouped = expenses.groupby("category", sort=False)["amount"].sum()
    return [{"category": cat, "amount": float(amt)} for cat, amt in grouped.items()]


def _period_series(df: pd.DataFrame, key: str) -> pd.DataFrame:
    return df.groupby(key)[["revenue", "expenses"]].sum().sort_index()


def monthly_series(df: pd.DataFrame) -> list[dict]:
    """Revenue/expenses per YYYY-MM, ascending."""
    grouped = _period_series(df, "month")
    return [
        {"month": month, "revenue": float(r["revenue"]), "expenses": float(r["expenses"])}
        for month, r in grouped.iterrows()
    ]


def _week_label(iso_day: str) -> str:
    ts = pd.Timestamp(iso_day)
    return f"{ts:%b} {ts.day}"


def weekly_series(df: pd.DataFrame) -> list[dict]:
    """Revenue/expenses per Sunday-start week, ascending, labelled "Jan 14"."""
    grouped = _period_series(df, "week_start")
    return [
        {"week": _week_label(week), "revenue": float(r["revenue"]), "expenses": float(r["expenses"])}
        for week, r in grouped.iterrows()
    ]


def calculate_kpis(df: pd.DataFrame, total_revenue: float, total_expenses: float) -> dict:
    expenses = df[~df["is_income"]]
    is_cogs = expenses["category"].isin(COGS_CATEGORIES)
    cogs = float(expenses.loc[is_cogs, "amount"].sum())
    operating_expenses = float(expenses.loc[~is_cogs, "amount"].sum())
    is_marketing = expenses["category"].str.lower().str.contains(MARKETING_KEYWORD, regex=False)
    marketing = float(expenses.loc[is_marketing, "amount"].sum())
    count = len(df)

    return {
        "grossMargin": safe_divide(total_revenue - cogs, total_revenue) * 100 if total_revenue > 0 else 0.0,
        "operatingMargin": (
            safe_divide(total_revenue - operating_expenses, total_revenue) * 100 if total_revenue > 0 else 0.0
        ),
        "burnRate": (total_expenses - total_revenue) / MONTHS_PER_YEAR,
        "customerAcquisitionCost": (
            marketing / max(1, count / CAC_TRANSACTIONS_PER_CUSTOMER) if marketing > 0 else 0.0
        ),
        "averageRevenuePerUser": (
            total_revenue / max(1, count / ARPU_TRANSACTIONS_PER_USER) if total_revenue > 0 else 0.0
        ),
        "churnRate": CHURN_RATE_PLACEHOLDER,
    }


def calculate_runway(net_cash_flow: float, total_expenses: float) -> float:
    """Months of net cash flow at the current monthly burn."""
    if total_expenses <= 0:
        return 0.0
    return max(0.0, net_cash_flow / (total_expenses / MONTHS_PER_YEAR))


def growth_rates(monthly: list[dict]) -> tuple[float, float]:
    """(revenue, expense) % change between the last two months; 0 without two months."""
    if len(monthly) < 2:
        return 0.0, 0.0
    prev, last = monthly[-2], monthly[-1]
    return (
        pct_change(last["revenue"], prev["revenue"]),
        pct_change(last["expenses"], prev["expenses"]),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compute_metrics(transactions: Iterable[Transaction]) -> dict:
    """Full FinancialMetrics dict (camelCase keys, JSON-ready)."""
    transactions = list(transactions)
    if not transactions:
        return empty_metrics()

    df = transactions_frame(transactions)

    total_revenue = float(df["revenue"].sum())
    total_expenses = float(df["expenses"].sum())
    net_cash_flow = total_revenue - total_expenses
    runway = calculate_runway(net_cash_flow, total_expenses)

    breakdown = expense_breakdown(df)
    monthly = monthly_series(df)
    weekly = weekly_series(df)

    kpis = calculate_kpis(df, total_revenue, total_expenses)
    trends = identify_trends(monthly)
    target_areas = identify_target_areas(breakdown, kpis)
    revenue_growth, expense_growth = growth_rates(monthly)

    return sanitize_for_json({
        "totalRevenue": total_revenue,
        "totalExpenses": total_expenses,
        "netCashFlow": net_cash_flow,
        "runway": runway,
        "revenueGrowthRate": revenue_growth,
        "expenseGrowthRate": expense_growth,
        "monthlyData": monthly,
        "weeklyData": weekly,
        "expenseBreakdown": breakdown,
        "kpis": kpis,
        "trends": trends,
        "targetAreas": target_areas,
    })
