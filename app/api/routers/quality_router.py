"""
app/api/routers/quality_router.py

Data-quality report endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.quality import DataQualityReportResponse
from app.storage.memory_store import MemoryStore, get_memory_store

router = APIRouter(tags=["quality"])


@router.get("/quality/report", response_model=DataQualityReportResponse)
def get_quality_report(store: MemoryStore = Depends(get_memory_store)) -> DataQualityReportResponse:
    report = store.get_quality_report()
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No quality report available. Run ingestion first.",
        )
    return DataQualityReportResponse.model_validate(report)
