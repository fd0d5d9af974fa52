"""
Target-area rules — cash flow, expense concentration, profitability.
"""
from __future__ import annotations

from cashpulse.config import (
    CATEGORY_SHARE_WARN_PCT, CATEGORY_SHARE_HIGH_PCT,
    GROSS_MARGIN_WARN_PCT, GROSS_MARGIN_HIGH_PCT,
)
from cashpulse.analytics.common import pct_of_total


def identify_target_areas(expense_breakdown: list[dict], kpis: dict) -> list[dict]:
    """Ordered list of {category, issue, priority, recommendation}.

    An empty list means nothing needs attention.
    """
    areas = []

    # Cash flow
    if kpis["burnRate"] > 0:
        areas.append({
            "category": "Cash Flow",
            "issue": "Negative cash flow detected",
            "priority": "high",
            "recommendation": "Focus on increasing revenue or reducing operating expenses",
        })

    # Expense concentration
    total_expenses = sum(row["amount"] for row in expense_breakdown)
    for row in expense_breakdown:
        share = pct_of_total(row["amount"], total_expenses)
        if share > CATEGORY_SHARE_WARN_PCT:
            cat = row["category"]
            areas.append({
                "category": "Expense Management",
                "issue": f"High spending in {cat} ({share:.1f}% of total expenses)",
                "priority": "high" if share > CATEGORY_SHARE_HIGH_PCT else "medium",
                "recommendation": f"Review and optimize {cat} expenses",
            })

    # Profitability
    gross_margin = kpis["grossMargin"]
    if gross_margin < GROSS_MARGIN_WARN_PCT:
        areas.append({
            "category": "Profitability",
            "issue": f"Low gross margin ({gross_margin:.1f}%)",
            "priority": "high" if gross_margin < GROSS_MARGIN_HIGH_PCT else "medium",
            "recommendation": "Consider increasing prices or reducing cost of goods sold",
        })

    return areas
