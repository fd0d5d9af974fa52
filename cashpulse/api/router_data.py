"""
Transaction endpoints: list, CSV upload, sample template.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from cashpulse.config import MAX_UPLOAD_BYTES
from cashpulse.data.normalize import sample_template
from cashpulse.data.store import TransactionStore
from cashpulse.api.dependencies import get_store, get_user_id
from cashpulse.api.response_models import TransactionOut, UploadResponse
from cashpulse.errors import ParseError, ValidationError
from cashpulse.services import ingest_csv

router = APIRouter(prefix="/api", tags=["data"])


@router.get("/financial-data", response_model=list[TransactionOut])
def list_financial_data(
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    """All transactions for the requesting user."""
    return [t.to_dict() for t in store.list_by_user(user_id)]


@router.post("/upload-financial-data", response_model=UploadResponse)
async def upload_financial_data(
    file: UploadFile = File(...),
    store: TransactionStore = Depends(get_store),
    user_id: str = Depends(get_user_id),
):
    """Ingest one CSV file. The whole file is accepted or nothing is stored."""
    filename = file.filename or ""
    if file.content_type != "text/csv" and not filename.lower().endswith(".csv"):
        raise HTTPException(400, "Only CSV files are supported")

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"File exceeds the {MAX_UPLOAD_BYTES // (1024 * 1024)}MB upload limit")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(400, "CSV files must be UTF-8 encoded")

    try:
        count = ingest_csv(store, text, user_id)
    except (ParseError, ValidationError) as exc:
        raise HTTPException(400, str(exc))

    return UploadResponse(message=f"Successfully uploaded {count} financial records", count=count)


@router.get("/sample-template", response_class=PlainTextResponse)
def get_sample_template():
    """Minimal CSV layout the uploader accepts."""
    return PlainTextResponse(
        sample_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="sample_transactions.csv"'},
    )
