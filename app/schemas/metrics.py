"""
app/schemas/metrics.py

Paginated response schemas for channel and funnel metrics.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class _KPIFields(BaseModel):
    model_config = {"from_attributes": True}

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
    quality_score: float
    total_records: int
    valid_records: int


class ChannelMetricsResponse(_KPIFields):
    channel: str
    date: str


class FunnelMetricsResponse(_KPIFields):
    utm_key: str
    utm_campaign: str
    utm_source: str
    utm_medium: str


class ChannelMetricsPage(BaseModel):
    data: list[ChannelMetricsResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    has_more: bool


class FunnelMetricsPage(BaseModel):
    data: list[FunnelMetricsResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    has_more: bool
