"""
tests/test_record_normalizer.py

Pytest unit tests for RecordNormalizer and build_utm_key.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from app.domain.records import RawAdsRecord, RawCRMRecord
from app.mappers.record_normalizer import RecordNormalizer, build_utm_key


class TestBuildUTMKey:
    def test_joins_segments(self) -> None:
        assert build_utm_key("summer", "google", "cpc") == "summer|google|cpc"

    def test_blank_segments_become_unknown(self) -> None:
        assert build_utm_key("summer", "", "  ") == "summer|unknown|unknown"


class TestNormalizeAds:
    def test_valid_record(self, normalizer: RecordNormalizer, raw_ads) -> None:
        record = normalizer.normalize_ads_record(raw_ads(), 3)
        assert record.date == date(2025, 8, 1)
        assert record.utm_key == "summer|google|cpc"
        assert record.quality.record_id == "ads_3"
        assert record.quality.is_valid
        assert record.quality.error_count == 0
        assert set(record.quality.field_errors) == {
            "date",
            "campaign_id",
            "channel",
            "clicks",
            "impressions",
            "cost",
            "utm_campaign",
            "utm_source",
            "utm_medium",
        }

    def test_invalid_fields_are_counted(self, normalizer: RecordNormalizer, raw_ads) -> None:
        record = normalizer.normalize_ads_record(raw_ads(channel="", clicks=-3, utm_source=None), 0)
        assert record.channel == "unknown"
        assert record.clicks == 0
        assert record.utm_source == "unknown"
        assert record.utm_key == "summer|unknown|cpc"
        assert record.quality.error_count == 3
        assert not record.quality.is_valid

    def test_error_count_matches_failing_entries(self, normalizer: RecordNormalizer, raw_ads) -> None:
        record = normalizer.normalize_ads_record(raw_ads(date="bad", cost="x"), 0)
        failing = [entry for entry in record.quality.field_errors.values() if not entry.is_valid]
        assert record.quality.error_count == len(failing) == 2

    def test_oversized_integer_does_not_abort(self, normalizer: RecordNormalizer, raw_ads) -> None:
        record = normalizer.normalize_ads_record(raw_ads(clicks=10**400, cost=10**400), 0)
        assert record.clicks == 0
        assert record.cost == 0.0
        assert record.quality.error_count == 2

    def test_batch_keeps_order_and_indexes(self, normalizer: RecordNormalizer, raw_ads) -> None:
        batch = normalizer.normalize_ads_records([raw_ads(campaign_id="A"), raw_ads(campaign_id="B")])
        assert [r.campaign_id for r in batch] == ["A", "B"]
        assert [r.quality.record_id for r in batch] == ["ads_0", "ads_1"]

    def test_from_payload_tolerates_missing_keys(self, normalizer: RecordNormalizer) -> None:
        record = normalizer.normalize_ads_record(RawAdsRecord.from_payload({}), 0)
        assert record.campaign_id == "unknown"
        assert record.date == date.min
        assert not record.quality.is_valid


class TestNormalizeCRM:
    def test_valid_record(self, normalizer: RecordNormalizer, raw_crm) -> None:
        record = normalizer.normalize_crm_record(raw_crm(stage="closed_won", amount=200.0), 1)
        assert record.quality.record_id == "crm_1"
        assert record.quality.is_valid
        assert record.amount == pytest.approx(200.0)
        assert record.created_at == datetime(2025, 8, 1, 10, 0, tzinfo=timezone.utc)
        assert record.created_on == date(2025, 8, 1)

    def test_bad_email_is_preserved(self, normalizer: RecordNormalizer, raw_crm) -> None:
        record = normalizer.normalize_crm_record(raw_crm(contact_email="not-an-email"), 0)
        assert record.contact_email == "not-an-email"
        entry = record.quality.field_errors["contact_email"]
        assert not entry.is_valid
        assert entry.description == "Invalid email format"
        assert not record.quality.is_valid

    def test_out_of_range_timestamp_does_not_abort(self, normalizer: RecordNormalizer, raw_crm) -> None:
        record = normalizer.normalize_crm_record(raw_crm(created_at="9999-12-31T23:30:00-01:00"), 0)
        assert not record.quality.field_errors["created_at"].is_valid
        assert not record.quality.is_valid

    def test_missing_opportunity_id(self, normalizer: RecordNormalizer) -> None:
        record = normalizer.normalize_crm_record(RawCRMRecord.from_payload({"stage": "lead"}), 0)
        assert record.opportunity_id == "unknown"
        assert record.quality.field_errors["opportunity_id"].description == "Missing - Opportunity ID is empty"
