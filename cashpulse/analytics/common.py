"""
Safe math helpers used across all analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def finite_or_zero(value: float) -> float:
    """Coerce NaN/Inf to 0.0."""
    value = float(value)
    return value if math.isfinite(value) else 0.0


def pct_change(current: float, previous: float) -> float:
    """Percentage change from previous to current; 0.0 when not finite."""
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.float64(current - previous) / np.float64(previous) * 100
    return finite_or_zero(result)


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total. Scales before dividing so 30 of 100 is exactly 30.0."""
    return safe_divide(part * 100, total)


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (np.floating, float)):
        return finite_or_zero(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    return obj
