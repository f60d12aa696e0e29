"""
app/mappers/record_normalizer.py

Maps raw feed records to normalized records with quality verdicts.

Normalization is total: any raw record yields exactly one normalized
record, with every problem captured in its ``RecordQuality``. Records
are processed independently and returned in input order.
"""

from __future__ import annotations

import logging
from typing import Iterable

from app.domain.quality import RecordQuality
from app.domain.records import (
    UNKNOWN,
    NormalizedAdsRecord,
    NormalizedCRMRecord,
    RawAdsRecord,
    RawCRMRecord,
)
from app.validators.field_validators import FieldValidator

logger = logging.getLogger(__name__)


def build_utm_key(campaign: str, source: str, medium: str) -> str:
    """
    Compose the ``campaign|source|medium`` attribution key.

    Blank segments become ``"unknown"`` so the key never has an empty part.
    """

    segments = [segment if segment.strip() else UNKNOWN for segment in (campaign, source, medium)]
    return "|".join(segments)


class RecordNormalizer:
    """
    Applies field validators to raw ads and CRM records.
    """

    def __init__(self, validator: FieldValidator | None = None) -> None:
        self._validator = validator or FieldValidator()

    def normalize_ads_records(self, records: Iterable[RawAdsRecord]) -> list[NormalizedAdsRecord]:
        normalized = [self.normalize_ads_record(record, index) for index, record in enumerate(records)]
        logger.debug("Normalized %d ads records", len(normalized))
        return normalized

    def normalize_crm_records(self, records: Iterable[RawCRMRecord]) -> list[NormalizedCRMRecord]:
        normalized = [self.normalize_crm_record(record, index) for index, record in enumerate(records)]
        logger.debug("Normalized %d CRM records", len(normalized))
        return normalized

    def normalize_ads_record(self, record: RawAdsRecord, index: int) -> NormalizedAdsRecord:
        v = self._validator
        quality = RecordQuality(record_id=f"ads_{index}")

        record_date = v.validate_date(record.date, "date", quality)
        campaign_id = v.validate_campaign_id(record.campaign_id, "campaign_id", quality)
        channel = v.validate_channel(record.channel, "channel", quality)
        clicks = v.validate_clicks(record.clicks, "clicks", quality)
        impressions = v.validate_impressions(record.impressions, "impressions", quality)
        cost = v.validate_cost(record.cost, "cost", quality)
        utm_campaign = v.validate_utm_campaign(record.utm_campaign, "utm_campaign", quality)
        utm_source = v.validate_utm_source(record.utm_source, "utm_source", quality)
        utm_medium = v.validate_utm_medium(record.utm_medium, "utm_medium", quality)

        return NormalizedAdsRecord(
            date=record_date,
            campaign_id=campaign_id,
            channel=channel,
            clicks=clicks,
            impressions=impressions,
            cost=cost,
            utm_campaign=utm_campaign,
            utm_source=utm_source,
            utm_medium=utm_medium,
            utm_key=build_utm_key(utm_campaign, utm_source, utm_medium),
            quality=quality.finalize(),
        )

    def normalize_crm_record(self, record: RawCRMRecord, index: int) -> NormalizedCRMRecord:
        v = self._validator
        quality = RecordQuality(record_id=f"crm_{index}")

        opportunity_id = v.validate_opportunity_id(record.opportunity_id, "opportunity_id", quality)
        contact_email = v.validate_email(record.contact_email, "contact_email", quality)
        stage = v.validate_stage(record.stage, "stage", quality)
        amount = v.validate_amount(record.amount, "amount", quality)
        created_at = v.validate_datetime(record.created_at, "created_at", quality)
        utm_campaign = v.validate_utm_campaign(record.utm_campaign, "utm_campaign", quality)
        utm_source = v.validate_utm_source(record.utm_source, "utm_source", quality)
        utm_medium = v.validate_utm_medium(record.utm_medium, "utm_medium", quality)

        return NormalizedCRMRecord(
            opportunity_id=opportunity_id,
            contact_email=contact_email,
            stage=stage,
            amount=amount,
            created_at=created_at,
            utm_campaign=utm_campaign,
            utm_source=utm_source,
            utm_medium=utm_medium,
            utm_key=build_utm_key(utm_campaign, utm_source, utm_medium),
            quality=quality.finalize(),
        )
