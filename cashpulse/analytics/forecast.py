"""
Forward projections — next month, next quarter, next year — from current growth rates.
"""
from __future__ import annotations

from cashpulse.config import MONTHS_PER_YEAR, HEALTHY_RUNWAY_MONTHS


def _projection(monthly_revenue: float, monthly_expenses: float, months: int) -> dict:
    revenue = monthly_revenue * months
    expenses = monthly_expenses * months
    return {"revenue": revenue, "expenses": expenses, "netCashFlow": revenue - expenses}


def generate_forecast(metrics: dict) -> dict:
    """Project revenue/expenses forward by compounding one month of growth."""
    monthly_revenue = metrics["totalRevenue"] / MONTHS_PER_YEAR
    monthly_expenses = metrics["totalExpenses"] / MONTHS_PER_YEAR

    next_revenue = monthly_revenue * (1 + metrics["revenueGrowthRate"] / 100)
    next_expenses = monthly_expenses * (1 + metrics["expenseGrowthRate"] / 100)
    runway = metrics["runway"]

    return {
        "nextMonthRevenue": next_revenue,
        "nextMonthExpenses": next_expenses,
        "quarterlyForecast": _projection(next_revenue, next_expenses, 3),
        "yearlyForecast": _projection(next_revenue, next_expenses, 12),
        "burnRate": monthly_expenses - monthly_revenue,
        "runwayMonths": runway,
        "runwayStatus": "healthy" if runway > HEALTHY_RUNWAY_MONTHS else "warning",
    }
