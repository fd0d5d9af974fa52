"""
FinancialSummary — the compact view of the metrics handed to the narrative generator.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict

from cashpulse.config import MONTHS_PER_YEAR


@dataclass(frozen=True)
class FinancialSummary:
    total_revenue: float
    total_expenses: float
    net_cash_flow: float
    average_monthly_revenue: float
    average_monthly_expenses: float
    revenue_growth_rate: float
    expense_growth_rate: float
    runway: float

    def to_dict(self) -> dict:
        return asdict(self)


def build_financial_summary(metrics: dict) -> FinancialSummary:
    """Summary from computed metrics; growth rates and runway are the engine's own."""
    return FinancialSummary(
        total_revenue=metrics["totalRevenue"],
        total_expenses=metrics["totalExpenses"],
        net_cash_flow=metrics["netCashFlow"],
        average_monthly_revenue=metrics["totalRevenue"] / MONTHS_PER_YEAR,
        average_monthly_expenses=metrics["totalExpenses"] / MONTHS_PER_YEAR,
        revenue_growth_rate=metrics["revenueGrowthRate"],
        expense_growth_rate=metrics["expenseGrowthRate"],
        runway=metrics["runway"],
    )
