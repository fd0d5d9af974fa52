"""
Meta endpoints: health.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from cashpulse.data.store import TransactionStore
from cashpulse.api.dependencies import get_store
from cashpulse.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: TransactionStore = Depends(get_store)):
    return HealthResponse(status="ok", backend=store.backend_name, rows=store.row_count())
