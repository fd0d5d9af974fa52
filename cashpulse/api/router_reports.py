"""
Report endpoints — generate a PDF report, list the report log.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from cashpulse.ai.insights import InsightGenerator
from cashpulse.data.schemas import ReportType
from cashpulse.data.store import TransactionStore
from cashpulse.api.dependencies import get_store, get_user_id, get_insight_generator
from cashpulse.api.response_models import ReportOut, ReportRequest
from cashpulse.errors import GenerationError, NoDataError, RenderError
from cashpulse.services import create_report

router = APIRouter(prefix="/api", tags=["reports"])


@router.post("/generate-report")
def generate_report(
    req: Optional[ReportRequest] = None,
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
    generator: InsightGenerator = Depends(get_insight_generator),
):
    """Generate, log, and return a PDF report."""
    req = req or ReportRequest()
    try:
        rendered = create_report(store, generator, user_id, req.title, ReportType(req.type))
    except NoDataError as exc:
        raise HTTPException(400, str(exc))
    except (GenerationError, RenderError) as exc:
        raise HTTPException(502, str(exc))

    return Response(
        content=rendered.pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{rendered.filename}"'},
    )


@router.get("/reports", response_model=list[ReportOut])
def list_reports(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    return [r.to_dict() for r in store.list_reports(user_id)]
