"""
tests/test_memory_store.py

Unit tests for MemoryStore date-range queries and replacement.
"""

from __future__ import annotations

import unittest
from datetime import date, datetime, timezone

from app.domain.quality import RecordQuality
from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord
from app.storage.memory_store import MemoryStore


def _ads(day: date) -> NormalizedAdsRecord:
    return NormalizedAdsRecord(
        date=day,
        campaign_id=f"C-{day.isoformat()}",
        channel="google_ads",
        clicks=1,
        impressions=1,
        cost=1.0,
        utm_campaign="summer",
        utm_source="google",
        utm_medium="cpc",
        utm_key="summer|google|cpc",
        quality=RecordQuality(record_id="ads_0"),
    )


def _crm(created_at: datetime) -> NormalizedCRMRecord:
    return NormalizedCRMRecord(
        opportunity_id=f"O-{created_at.isoformat()}",
        contact_email="a@b.co",
        stage="lead",
        amount=0.0,
        created_at=created_at,
        utm_campaign="summer",
        utm_source="google",
        utm_medium="cpc",
        utm_key="summer|google|cpc",
        quality=RecordQuality(record_id="crm_0"),
    )


class TestMemoryStore(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.store.replace(
            ads_records=[_ads(date(2025, 8, d)) for d in (1, 2, 3)],
            crm_records=[
                _crm(datetime(2025, 8, 1, 23, 59, tzinfo=timezone.utc)),
                _crm(datetime(2025, 8, 3, 0, 0, tzinfo=timezone.utc)),
            ],
            quality_report=None,
            ingested_at=datetime(2025, 8, 4, tzinfo=timezone.utc),
        )

    def test_inclusive_ads_range(self) -> None:
        records = self.store.get_ads_records(date(2025, 8, 2), date(2025, 8, 3))
        self.assertEqual([r.date.day for r in records], [2, 3])

    def test_open_bounds(self) -> None:
        self.assertEqual(len(self.store.get_ads_records()), 3)
        self.assertEqual(len(self.store.get_ads_records(date_to=date(2025, 8, 1))), 1)

    def test_crm_uses_creation_day(self) -> None:
        records = self.store.get_crm_records(date(2025, 8, 1), date(2025, 8, 1))
        self.assertEqual(len(records), 1)

    def test_has_data_needs_both_batches(self) -> None:
        self.assertTrue(self.store.has_data())
        self.store.replace(
            ads_records=[_ads(date(2025, 8, 1))],
            crm_records=[],
            quality_report=None,
            ingested_at=datetime(2025, 8, 5, tzinfo=timezone.utc),
        )
        self.assertFalse(self.store.has_data())
        self.assertEqual(self.store.last_ingested_at, datetime(2025, 8, 5, tzinfo=timezone.utc))

    def test_clear(self) -> None:
        self.store.clear()
        self.assertEqual(self.store.get_ads_records(), [])
        self.assertIsNone(self.store.last_ingested_at)
        self.assertIsNone(self.store.get_quality_report())


if __name__ == "__main__":
    unittest.main()
