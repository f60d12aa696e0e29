"""
app/schemas/ingestion.py

Response schema for ingestion runs.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from app.schemas.quality import QualitySummaryResponse


class IngestionRunResponse(BaseModel):
    model_config = {"from_attributes": True}

    status: str = "success"
    ads_records: int = Field(..., ge=0)
    crm_records: int = Field(..., ge=0)
    ads_duplicates: int = Field(..., ge=0)
    crm_duplicates: int = Field(..., ge=0)
    failed_entries: int = Field(..., ge=0)
    processed_at: datetime
    since: date | None = None
    quality_summary: QualitySummaryResponse
