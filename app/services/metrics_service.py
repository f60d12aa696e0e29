"""
app/services/metrics_service.py

Joins advertising and CRM batches into channel and funnel KPI rows.

Channel metrics
---------------
Ads records are grouped by ``(date, channel)``. A CRM record is attributed
to a group when its creation day equals the group date and its ``utm_key``
is one of the keys seen in that group. Rows are ordered by date, then
channel.

Funnel metrics
--------------
Ads records are grouped by ``utm_key``; CRM records are attributed by exact
``utm_key`` match with no date constraint. Rows keep the order in which
each key first appears in the ads batch.

Each row also carries the share of valid ads records in its group as
``quality_score`` (0-100).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Iterable, Sequence

from app.domain.metrics import ChannelMetrics, FunnelMetrics
from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord
from app.services.quality_service import quality_percentage
from kpi.attribution import StageTally, apply_stage
from kpi.marketing import MarketingKPIFormula

logger = logging.getLogger(__name__)


@dataclass
class _AdsGroup:
    clicks: int = 0
    impressions: int = 0
    cost: float = 0.0
    total_records: int = 0
    valid_records: int = 0
    utm_keys: set[str] = field(default_factory=set)
    first_record: NormalizedAdsRecord | None = None

    def add(self, record: NormalizedAdsRecord) -> None:
        if self.first_record is None:
            self.first_record = record
        self.clicks += record.clicks
        self.impressions += record.impressions
        self.cost += record.cost
        self.total_records += 1
        if record.quality.is_valid:
            self.valid_records += 1
        self.utm_keys.add(record.utm_key)

    @property
    def quality_score(self) -> float:
        return quality_percentage(self.valid_records, self.total_records)


class MetricsService:
    """
    Computes :class:`ChannelMetrics` and :class:`FunnelMetrics` rows.
    """

    def __init__(self, formula: MarketingKPIFormula | None = None) -> None:
        self._formula = formula or MarketingKPIFormula()

    # ------------------------------------------------------------------
    # Channel level
    # ------------------------------------------------------------------

    def calculate_channel_metrics(
        self,
        ads_records: Sequence[NormalizedAdsRecord],
        crm_records: Sequence[NormalizedCRMRecord],
        channel: str | None = None,
    ) -> list[ChannelMetrics]:
        groups: dict[tuple[date, str], _AdsGroup] = {}
        for record in ads_records:
            if channel and record.channel != channel:
                continue
            groups.setdefault((record.date, record.channel), _AdsGroup()).add(record)

        crm_by_day: dict[date, list[NormalizedCRMRecord]] = {}
        for crm_record in crm_records:
            crm_by_day.setdefault(crm_record.created_on, []).append(crm_record)

        metrics: list[ChannelMetrics] = []
        for (group_date, group_channel), group in sorted(groups.items(), key=lambda item: item[0]):
            tally = _tally(
                crm_record
                for crm_record in crm_by_day.get(group_date, [])
                if crm_record.utm_key in group.utm_keys
            )
            ratios = self._ratios(group, tally)
            metrics.append(
                ChannelMetrics(
                    channel=group_channel,
                    date=group_date.isoformat(),
                    clicks=group.clicks,
                    impressions=group.impressions,
                    cost=group.cost,
                    leads=tally.leads,
                    opportunities=tally.reached_opportunity,
                    closed_won=tally.closed_won,
                    revenue=tally.revenue,
                    quality_score=group.quality_score,
                    total_records=group.total_records,
                    valid_records=group.valid_records,
                    **ratios,
                )
            )

        logger.debug("Computed %d channel metric rows channel_filter=%s", len(metrics), channel)
        return metrics

    # ------------------------------------------------------------------
    # Funnel level
    # ------------------------------------------------------------------

    def calculate_funnel_metrics(
        self,
        ads_records: Sequence[NormalizedAdsRecord],
        crm_records: Sequence[NormalizedCRMRecord],
        utm_campaign: str | None = None,
    ) -> list[FunnelMetrics]:
        groups: dict[str, _AdsGroup] = {}
        for record in ads_records:
            if utm_campaign and record.utm_campaign != utm_campaign:
                continue
            groups.setdefault(record.utm_key, _AdsGroup()).add(record)

        crm_by_key: dict[str, list[NormalizedCRMRecord]] = {}
        for crm_record in crm_records:
            crm_by_key.setdefault(crm_record.utm_key, []).append(crm_record)

        metrics: list[FunnelMetrics] = []
        for utm_key, group in groups.items():
            tally = _tally(crm_by_key.get(utm_key, []))
            ratios = self._ratios(group, tally)
            first = group.first_record
            metrics.append(
                FunnelMetrics(
                    utm_key=utm_key,
                    utm_campaign=first.utm_campaign if first else "",
                    utm_source=first.utm_source if first else "",
                    utm_medium=first.utm_medium if first else "",
                    clicks=group.clicks,
                    impressions=group.impressions,
                    cost=group.cost,
                    leads=tally.leads,
                    opportunities=tally.reached_opportunity,
                    closed_won=tally.closed_won,
                    revenue=tally.revenue,
                    quality_score=group.quality_score,
                    total_records=group.total_records,
                    valid_records=group.valid_records,
                    **ratios,
                )
            )

        logger.debug("Computed %d funnel metric rows campaign_filter=%s", len(metrics), utm_campaign)
        return metrics

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ratios(self, group: _AdsGroup, tally: StageTally) -> dict[str, float]:
        return self._formula.calculate(
            {
                "clicks": group.clicks,
                "cost": group.cost,
                "leads": tally.leads,
                "opportunities": tally.opportunities,
                "closed_won": tally.closed_won,
                "revenue": tally.revenue,
            }
        )


def _tally(crm_records: Iterable[NormalizedCRMRecord]) -> StageTally:
    tally = StageTally()
    for crm_record in crm_records:
        apply_stage(tally, crm_record.stage, crm_record.amount)
    return tally


@lru_cache(maxsize=1)
def get_metrics_service() -> MetricsService:
    return MetricsService()
