"""
CashPulse — FastAPI app factory with startup store selection.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cashpulse.data.store import build_store
from cashpulse.api.dependencies import set_store, set_insight_generator
from cashpulse.api.router_meta import router as meta_router
from cashpulse.api.router_data import router as data_router
from cashpulse.api.router_metrics import router as metrics_router
from cashpulse.api.router_insights import router as insights_router
from cashpulse.api.router_reports import router as reports_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Pick the storage backend once, before serving."""
    from cashpulse.config import BASE_FOLDER, STORAGE_BACKEND, OPENAI_API_KEY, OPENAI_MODEL

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print(f"  CASHPULSE_DATA_DIR = {BASE_FOLDER}")
    print(f"  Storage backend    = {STORAGE_BACKEND}")
    print(f"  LLM model          = {OPENAI_MODEL} ({'key set' if OPENAI_API_KEY else 'no API key'})")

    store = build_store(STORAGE_BACKEND)
    set_store(store)
    print(f"\nCashPulse ready — {store.row_count():,} transactions in {store.backend_name} store\n")
    yield
    set_store(None)
    set_insight_generator(None)


def create_app() -> FastAPI:
    app = FastAPI(
        title="CashPulse API",
        description="Small-business cash flow metrics, AI insights, and PDF reports",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(data_router)
    app.include_router(metrics_router)
    app.include_router(insights_router)
    app.include_router(reports_router)
    return app


app = create_app()
