"""
Metrics endpoints — FinancialMetrics, forecasts, workbook export.
"""
from __future__ import annotations

import tempfile
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from cashpulse.analytics.forecast import generate_forecast
from cashpulse.analytics.metrics import compute_metrics
from cashpulse.data.store import TransactionStore
from cashpulse.api.dependencies import get_store, get_user_id
from cashpulse.api.response_models import FinancialMetricsResponse, ForecastResponse
from cashpulse.reports.metrics_workbook import generate_excel

router = APIRouter(prefix="/api", tags=["metrics"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/financial-metrics", response_model=FinancialMetricsResponse)
def financial_metrics(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    """Recomputed from the user's full transaction set on every call."""
    return compute_metrics(store.list_by_user(user_id))


@router.get("/forecasts", response_model=ForecastResponse)
def forecasts(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    """Next month / quarter / year projections from current growth rates."""
    return generate_forecast(compute_metrics(store.list_by_user(user_id)))


@router.get("/financial-metrics/export")
def export_metrics(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    """Metrics workbook (.xlsx) download."""
    metrics = compute_metrics(store.list_by_user(user_id))
    with tempfile.TemporaryDirectory() as tmp:
        path = generate_excel(metrics, Path(tmp) / "Financial_Metrics.xlsx")
        content = path.read_bytes()
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="Financial_Metrics.xlsx"'},
    )
