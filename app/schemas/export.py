"""
app/schemas/export.py

Response schemas for the daily export endpoint.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ExportRecordResponse(BaseModel):
    model_config = {"from_attributes": True}

    date: str
    channel: str
    campaign_id: str
    clicks: int
    impressions: int
    cost: float
    leads: int
    opportunities: int
    closed_won: int
    revenue: float
    cpc: float
    cpa: float
    cvr_lead_to_opp: float
    cvr_opp_to_won: float
    roas: float


class ExportRunResponse(BaseModel):
    status: str = "success"
    date: str
    records_count: int = Field(..., ge=0)
    records_sent: int = Field(..., ge=0)
    exported_at: datetime
    sink_url: str | None = None
    data: list[ExportRecordResponse] = Field(default_factory=list)
