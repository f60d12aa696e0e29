"""
app/storage/memory_store.py

Process-local store for the latest ingested batches.

Contents are replaced wholesale by each ingestion run; readers always see
either the previous or the new batch, never a mix.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import lru_cache

from app.domain.quality import DataQualityReport
from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord


@dataclass(frozen=True)
class StoreSnapshot:
    """
    One consistent view of everything an ingestion run produced.
    """

    ads_records: list[NormalizedAdsRecord] = field(default_factory=list)
    crm_records: list[NormalizedCRMRecord] = field(default_factory=list)
    quality_report: DataQualityReport | None = None
    ingested_at: datetime | None = None


def _in_range(day: date, date_from: date | None, date_to: date | None) -> bool:
    if date_from is not None and day < date_from:
        return False
    if date_to is not None and day > date_to:
        return False
    return True


class MemoryStore:
    """
    Thread-safe holder of the current :class:`StoreSnapshot`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = StoreSnapshot()

    def replace(
        self,
        *,
        ads_records: list[NormalizedAdsRecord],
        crm_records: list[NormalizedCRMRecord],
        quality_report: DataQualityReport | None,
        ingested_at: datetime,
    ) -> None:
        snapshot = StoreSnapshot(
            ads_records=list(ads_records),
            crm_records=list(crm_records),
            quality_report=quality_report,
            ingested_at=ingested_at,
        )
        with self._lock:
            self._snapshot = snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = StoreSnapshot()

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return self._snapshot

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_ads_records(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[NormalizedAdsRecord]:
        """Ads records whose ``date`` falls in the inclusive range."""
        records = self.snapshot().ads_records
        return [record for record in records if _in_range(record.date, date_from, date_to)]

    def get_crm_records(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[NormalizedCRMRecord]:
        """CRM records whose ``created_at`` day falls in the inclusive range."""
        records = self.snapshot().crm_records
        return [record for record in records if _in_range(record.created_on, date_from, date_to)]

    def get_quality_report(self) -> DataQualityReport | None:
        return self.snapshot().quality_report

    @property
    def last_ingested_at(self) -> datetime | None:
        return self.snapshot().ingested_at

    def has_data(self) -> bool:
        snapshot = self.snapshot()
        return bool(snapshot.ads_records) and bool(snapshot.crm_records)


@lru_cache(maxsize=1)
def get_memory_store() -> MemoryStore:
    """
    Return the process-wide store shared by ingestion and the read endpoints.
    """

    return MemoryStore()
