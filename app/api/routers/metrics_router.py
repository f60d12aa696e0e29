"""
app/api/routers/metrics_router.py

Paginated channel and funnel metrics endpoints.

Both endpoints narrow the stored batches to the ``from``/``to`` window
(ads by date, CRM by creation day) before aggregating, then page the
resulting rows with ``limit``/``offset``.
"""

from __future__ import annotations

from datetime import date
from typing import Sequence, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.config import get_ingestion_settings
from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord
from app.schemas.metrics import (
    ChannelMetricsPage,
    ChannelMetricsResponse,
    FunnelMetricsPage,
    FunnelMetricsResponse,
)
from app.services.metrics_service import MetricsService, get_metrics_service
from app.storage.memory_store import MemoryStore, get_memory_store

router = APIRouter(tags=["metrics"])

RowT = TypeVar("RowT")


def _window(
    store: MemoryStore,
    date_from: date | None,
    date_to: date | None,
) -> tuple[list[NormalizedAdsRecord], list[NormalizedCRMRecord]]:
    if date_from is not None and date_to is not None and date_from > date_to:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="'from' must not be after 'to'.",
        )
    return store.get_ads_records(date_from, date_to), store.get_crm_records(date_from, date_to)


def _paginate(rows: Sequence[RowT], limit: int | None, offset: int) -> tuple[list[RowT], dict[str, int | bool]]:
    page_size = limit or get_ingestion_settings().default_page_size
    total = len(rows)
    end = min(offset + page_size, total)
    page_rows = list(rows[offset:end])
    return page_rows, {
        "total": total,
        "page": offset // page_size + 1,
        "limit": page_size,
        "has_more": end < total,
    }


@router.get("/metrics/channel", response_model=ChannelMetricsPage)
def get_channel_metrics(
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    channel: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: MemoryStore = Depends(get_memory_store),
    metrics_service: MetricsService = Depends(get_metrics_service),
) -> ChannelMetricsPage:
    ads_records, crm_records = _window(store, date_from, date_to)
    rows = metrics_service.calculate_channel_metrics(ads_records, crm_records, channel=channel)
    page_rows, envelope = _paginate(rows, limit, offset)
    return ChannelMetricsPage(
        data=[ChannelMetricsResponse.model_validate(row) for row in page_rows],
        **envelope,
    )


@router.get("/metrics/funnel", response_model=FunnelMetricsPage)
def get_funnel_metrics(
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    utm_campaign: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: MemoryStore = Depends(get_memory_store),
    metrics_service: MetricsService = Depends(get_metrics_service),
) -> FunnelMetricsPage:
    ads_records, crm_records = _window(store, date_from, date_to)
    rows = metrics_service.calculate_funnel_metrics(ads_records, crm_records, utm_campaign=utm_campaign)
    page_rows, envelope = _paginate(rows, limit, offset)
    return FunnelMetricsPage(
        data=[FunnelMetricsResponse.model_validate(row) for row in page_rows],
        **envelope,
    )
