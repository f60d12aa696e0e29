"""
app/api/routers/export_router.py

Daily export endpoint.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.config import get_export_sink_settings
from app.schemas.export import ExportRecordResponse, ExportRunResponse
from app.services.export_service import ExportError, ExportService, get_export_service
from app.services.metrics_service import MetricsService, get_metrics_service
from app.storage.memory_store import MemoryStore, get_memory_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"])


@router.post("/export/run", response_model=ExportRunResponse)
def run_export(
    export_date: date = Query(..., alias="date", description="Day to export, YYYY-MM-DD"),
    store: MemoryStore = Depends(get_memory_store),
    metrics_service: MetricsService = Depends(get_metrics_service),
    export_service: ExportService = Depends(get_export_service),
) -> ExportRunResponse:
    """
    Compute channel metrics for one day and deliver them to the sink.
    """

    ads_records = store.get_ads_records(export_date, export_date)
    if not ads_records:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No data found for the specified date.",
        )
    crm_records = store.get_crm_records(export_date, export_date)

    channel_metrics = metrics_service.calculate_channel_metrics(ads_records, crm_records)
    try:
        outcome = export_service.export_daily_records(channel_metrics)
    except ExportError as exc:
        logger.error("Export run failed date=%s error=%s", export_date.isoformat(), exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to export data.",
        ) from exc

    return ExportRunResponse(
        date=export_date.isoformat(),
        records_count=len(outcome.records),
        records_sent=outcome.sent,
        exported_at=datetime.now(tz=timezone.utc),
        sink_url=get_export_sink_settings().sink_url if export_service.sink_enabled else None,
        data=[ExportRecordResponse.model_validate(record) for record in outcome.records],
    )
