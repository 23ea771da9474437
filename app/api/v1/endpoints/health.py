"""
Liveness / readiness probe.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.api.v1.deps import get_store
from app.core.config import settings
from app.db.store import DocumentStore

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health(store: DocumentStore = Depends(get_store)) -> dict:
    """Report service version and whether the store answers a trivial read."""
    try:
        await store.find("users", {"username": settings.FIRST_ADMIN_USERNAME})
        database = "ok"
    except Exception as exc:  # any store failure marks the probe degraded
        logger.error("Health check: store unreachable: %s", exc)
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "version": settings.VERSION,
        "database": database,
    }
