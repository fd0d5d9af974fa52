"""
FastAPI dependencies — store + insight generator singletons, request user.
"""
from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException

from cashpulse.ai.insights import InsightGenerator, build_insight_generator
from cashpulse.config import DEFAULT_USER_ID
from cashpulse.data.store import TransactionStore
from cashpulse.errors import GenerationError

# ---------------------------------------------------------------------------
# Global singletons (set during startup)
# ---------------------------------------------------------------------------
_store: TransactionStore | None = None
_generator: InsightGenerator | None = None


def set_store(store: TransactionStore | None) -> None:
    global _store
    _store = store


def get_store() -> TransactionStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def set_insight_generator(generator: InsightGenerator | None) -> None:
    global _generator
    _generator = generator


def get_insight_generator() -> InsightGenerator:
    """Built lazily so the API serves metrics even without LLM credentials."""
    global _generator
    if _generator is None:
        try:
            _generator = build_insight_generator()
        except GenerationError as exc:
            raise HTTPException(502, str(exc)) from exc
    return _generator


# ---------------------------------------------------------------------------
# Request user
# ---------------------------------------------------------------------------

def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Owner of the request; no authentication, just a scoping key."""
    user = (x_user_id or "").strip()
    return user or DEFAULT_USER_ID
