"""
app/api/routers/health_router.py

Liveness and readiness probes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.storage.memory_store import MemoryStore, get_memory_store

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
def readyz(store: MemoryStore = Depends(get_memory_store)) -> dict[str, str]:
    """
    Ready once an ingestion run has stored both ads and CRM records.
    """

    if not store.has_data():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No data ingested yet.",
        )
    return {"status": "ready"}
