"""
app/api/routers/ingestion_router.py

Ingestion run endpoint.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas.ingestion import IngestionRunResponse
from app.services.ingestion_service import (
    IngestionFetchError,
    IngestionService,
    get_ingestion_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingestion"])


@router.post("/ingest/run", response_model=IngestionRunResponse)
def run_ingestion(
    since: date | None = Query(default=None, description="Keep only records dated on/after YYYY-MM-DD"),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionRunResponse:
    """
    Fetch both feeds, rebuild the store, and return the run summary.
    """

    try:
        result = ingestion_service.run(since=since)
    except IngestionFetchError as exc:
        logger.error("Ingestion run failed source=%s error=%s", exc.source, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    return IngestionRunResponse.model_validate(result)
