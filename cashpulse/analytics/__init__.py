"""Metrics engine, trend and target-area rules, summaries, and forecasts."""
from .metrics import compute_metrics, empty_metrics
from .trends import identify_trends
from .recommendations import identify_target_areas
from .summary import FinancialSummary, build_financial_summary
from .forecast import generate_forecast
