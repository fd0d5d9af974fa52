"""
AI insight endpoints — list + regenerate.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cashpulse.ai.insights import InsightGenerator
from cashpulse.data.store import TransactionStore
from cashpulse.api.dependencies import get_store, get_user_id, get_insight_generator
from cashpulse.api.response_models import InsightOut
from cashpulse.errors import GenerationError, NoDataError
from cashpulse.services import regenerate_insights

router = APIRouter(prefix="/api", tags=["insights"])


@router.get("/ai-insights", response_model=list[InsightOut])
def list_insights(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    return [i.to_dict() for i in store.list_insights(user_id)]


@router.post("/generate-insights", response_model=list[InsightOut])
def generate_insights(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
    generator: InsightGenerator = Depends(get_insight_generator),
):
    """Replace the user's insights with a freshly generated set."""
    try:
        saved = regenerate_insights(store, generator, user_id)
    except NoDataError as exc:
        raise HTTPException(400, str(exc))
    except GenerationError as exc:
        raise HTTPException(502, str(exc))
    return [i.to_dict() for i in saved]
