"""
app/domain/metrics.py

Aggregated marketing KPI rows and their export shape.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelMetrics:
    """
    KPIs for one (date, channel) group of advertising records.

    ``opportunities`` counts every CRM record that reached opportunity
    stage, including those that were won.
    """

    channel: str
    date: str
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
    quality_score: float = 0.0
    total_records: int = 0
    valid_records: int = 0


@dataclass(frozen=True)
class FunnelMetrics:
    """
    KPIs for one attribution UTM key, independent of date.
    """

    utm_key: str
    utm_campaign: str
    utm_source: str
    utm_medium: str
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
    quality_score: float = 0.0
    total_records: int = 0
    valid_records: int = 0


@dataclass(frozen=True)
class ExportRecord:
    """
    Denormalized row posted to the export sink.

    Field order is the serialization order used for signing.
    """

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
