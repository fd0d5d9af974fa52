"""
Trend direction and seasonality over the monthly series.
"""
from __future__ import annotations

from cashpulse.config import TREND_WINDOW, REVENUE_SLOPE_THRESHOLD, EXPENSE_SLOPE_THRESHOLD
from cashpulse.analytics.common import safe_divide

INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"


def classify_slope(values: list[float], threshold: float) -> str:
    """Direction of the last TREND_WINDOW values: half the first-to-last change vs ±threshold."""
    window = values[-TREND_WINDOW:]
    slope = (window[-1] - window[0]) / 2
    if slope > threshold:
        return INCREASING
    if slope < -threshold:
        return DECREASING
    return STABLE


def seasonality(monthly: list[dict]) -> list[dict]:
    """Each month's revenue relative to the mean monthly revenue (1-based position)."""
    revenues = [m["revenue"] for m in monthly]
    mean = safe_divide(sum(revenues), len(revenues))
    if mean == 0:
        mean = 1
    return [
        {"month": i, "factor": rev / mean}
        for i, rev in enumerate(revenues, 1)
    ]


def identify_trends(monthly: list[dict]) -> dict:
    """Revenue/expense direction + seasonality. Needs TREND_WINDOW months, else stable."""
    if len(monthly) < TREND_WINDOW:
        return {
            "revenueDirection": STABLE,
            "expenseDirection": STABLE,
            "seasonality": [],
        }

    return {
        "revenueDirection": classify_slope([m["revenue"] for m in monthly], REVENUE_SLOPE_THRESHOLD),
        "expenseDirection": classify_slope([m["expenses"] for m in monthly], EXPENSE_SLOPE_THRESHOLD),
        "seasonality": seasonality(monthly),
    }
