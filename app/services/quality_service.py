"""
app/services/quality_service.py

Dataset-level data-quality reporting.

Scores
------
ads_quality_score     = valid_ads / total_ads * 100
crm_quality_score     = valid_crm / total_crm * 100
overall_quality_score = (valid_ads + valid_crm) / (total_ads + total_crm) * 100

Each score is ``0.0`` for an empty denominator. Only surviving (deduplicated)
records count; dropped duplicates are reported beside the scores.

Common issues
-------------
Descriptions of failing field verdicts across both batches, kept only when
seen more than once, ordered by count (descending) then text.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from functools import lru_cache
from typing import Sequence

from app.domain.quality import DataQualityReport, QualitySummary, RecordQuality
from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord

logger = logging.getLogger(__name__)


def quality_percentage(valid: int, total: int) -> float:
    """Share of valid records as a percentage; ``0.0`` when *total* is zero."""
    if total == 0:
        return 0.0
    return valid / total * 100


class QualityService:
    """
    Builds :class:`DataQualityReport` objects from normalized batches.

    Stateless; the same inputs always produce the same summary.
    """

    def generate_quality_report(
        self,
        ads_records: Sequence[NormalizedAdsRecord],
        crm_records: Sequence[NormalizedCRMRecord],
        *,
        ads_duplicates: Sequence[NormalizedAdsRecord] = (),
        crm_duplicates: Sequence[NormalizedCRMRecord] = (),
        generated_at: datetime | None = None,
    ) -> DataQualityReport:
        ads_quality = [record.quality for record in ads_records]
        crm_quality = [record.quality for record in crm_records]

        valid_ads = sum(1 for quality in ads_quality if quality.is_valid)
        valid_crm = sum(1 for quality in crm_quality if quality.is_valid)
        total_ads = len(ads_quality)
        total_crm = len(crm_quality)

        summary = QualitySummary(
            total_ads_records=total_ads,
            valid_ads_records=valid_ads,
            ads_quality_score=quality_percentage(valid_ads, total_ads),
            total_crm_records=total_crm,
            valid_crm_records=valid_crm,
            crm_quality_score=quality_percentage(valid_crm, total_crm),
            overall_quality_score=quality_percentage(valid_ads + valid_crm, total_ads + total_crm),
            common_issues=self.identify_common_issues([*ads_quality, *crm_quality]),
            duplicate_ads_records=len(ads_duplicates),
            duplicate_crm_records=len(crm_duplicates),
        )
        logger.debug(
            "Quality report built ads=%d/%d crm=%d/%d overall=%.2f",
            valid_ads,
            total_ads,
            valid_crm,
            total_crm,
            summary.overall_quality_score,
        )

        return DataQualityReport(
            summary=summary,
            ads_quality=ads_quality,
            crm_quality=crm_quality,
            timestamp=generated_at or datetime.now(tz=timezone.utc),
            ads_duplicates=[record.quality for record in ads_duplicates],
            crm_duplicates=[record.quality for record in crm_duplicates],
        )

    def identify_common_issues(self, qualities: Sequence[RecordQuality]) -> list[str]:
        """
        Return recurring failure descriptions as ``"<text> (occurs N times)"``.
        """

        issue_count: Counter[str] = Counter()
        for quality in qualities:
            issue_count.update(quality.invalid_descriptions())

        recurring = [(issue, count) for issue, count in issue_count.items() if count > 1]
        recurring.sort(key=lambda item: (-item[1], item[0]))
        return [f"{issue} (occurs {count} times)" for issue, count in recurring]


@lru_cache(maxsize=1)
def get_quality_service() -> QualityService:
    return QualityService()
