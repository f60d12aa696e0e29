"""
app/services/ingestion_service.py

One ingestion run: fetch -> normalize -> deduplicate -> filter -> report -> store.

The store is only touched once both feeds have been fetched and the whole
batch has been processed, so a failed run leaves the previous data in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from functools import lru_cache

from app.config import get_external_http_settings, get_source_settings
from app.connectors.ads_connector import AdsConnector
from app.connectors.base import ConnectorRequestError
from app.connectors.crm_connector import CRMConnector
from app.domain.quality import QualitySummary
from app.logging_utils import log_event
from app.mappers.record_normalizer import RecordNormalizer
from app.services.deduplication_service import DeduplicationService
from app.services.quality_service import QualityService
from app.storage.memory_store import MemoryStore, get_memory_store

logger = logging.getLogger(__name__)


class IngestionFetchError(RuntimeError):
    """
    Raised when a feed could not be fetched; ``source`` names the feed.
    """

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source


@dataclass(frozen=True)
class IngestionResult:
    """
    Counts and quality summary of a completed ingestion run.
    """

    ads_records: int
    crm_records: int
    ads_duplicates: int
    crm_duplicates: int
    failed_entries: int
    processed_at: datetime
    since: date | None
    quality_summary: QualitySummary


class IngestionService:
    """
    Runs the full pipeline for both feeds and publishes the result to the store.
    """

    def __init__(
        self,
        *,
        ads_connector: AdsConnector,
        crm_connector: CRMConnector,
        store: MemoryStore,
        normalizer: RecordNormalizer | None = None,
        deduplicator: DeduplicationService | None = None,
        quality_service: QualityService | None = None,
    ) -> None:
        self._ads_connector = ads_connector
        self._crm_connector = crm_connector
        self._store = store
        self._normalizer = normalizer or RecordNormalizer()
        self._deduplicator = deduplicator or DeduplicationService()
        self._quality_service = quality_service or QualityService()

    def run(self, since: date | None = None) -> IngestionResult:
        started_at = datetime.now(tz=timezone.utc)

        try:
            ads_fetch = self._ads_connector.fetch_records()
        except ConnectorRequestError as exc:
            raise IngestionFetchError("ads", f"Failed to fetch ads data: {exc}") from exc
        try:
            crm_fetch = self._crm_connector.fetch_records()
        except ConnectorRequestError as exc:
            raise IngestionFetchError("crm", f"Failed to fetch CRM data: {exc}") from exc

        ads_dedup = self._deduplicator.deduplicate_ads_records(
            self._normalizer.normalize_ads_records(ads_fetch.records)
        )
        crm_dedup = self._deduplicator.deduplicate_crm_records(
            self._normalizer.normalize_crm_records(crm_fetch.records)
        )

        ads_records = ads_dedup.records
        crm_records = crm_dedup.records
        if since is not None:
            ads_records = [record for record in ads_records if record.date >= since]
            crm_records = [record for record in crm_records if record.created_on >= since]
            logger.info(
                "Applied since filter since=%s ads_kept=%d crm_kept=%d",
                since.isoformat(),
                len(ads_records),
                len(crm_records),
            )

        processed_at = datetime.now(tz=timezone.utc)
        report = self._quality_service.generate_quality_report(
            ads_records,
            crm_records,
            ads_duplicates=ads_dedup.duplicates,
            crm_duplicates=crm_dedup.duplicates,
            generated_at=processed_at,
        )
        self._store.replace(
            ads_records=ads_records,
            crm_records=crm_records,
            quality_report=report,
            ingested_at=processed_at,
        )

        summary = report.summary
        if summary.common_issues:
            logger.warning("Data quality issues detected: %s", "; ".join(summary.common_issues))

        result = IngestionResult(
            ads_records=len(ads_records),
            crm_records=len(crm_records),
            ads_duplicates=len(ads_dedup.duplicates),
            crm_duplicates=len(crm_dedup.duplicates),
            failed_entries=ads_fetch.failed_records + crm_fetch.failed_records,
            processed_at=processed_at,
            since=since,
            quality_summary=summary,
        )
        log_event(
            logger,
            logging.INFO,
            "ingestion_completed",
            ads_records=result.ads_records,
            crm_records=result.crm_records,
            ads_duplicates=result.ads_duplicates,
            crm_duplicates=result.crm_duplicates,
            failed_entries=result.failed_entries,
            overall_quality_score=round(summary.overall_quality_score, 2),
            duration_ms=int((processed_at - started_at).total_seconds() * 1000),
        )
        return result


@lru_cache(maxsize=1)
def get_ingestion_service() -> IngestionService:
    """
    Build and cache the ingestion service wired to the configured feeds.
    """

    http_settings = get_external_http_settings()
    source_settings = get_source_settings()
    return IngestionService(
        ads_connector=AdsConnector(url=source_settings.ads_api_url, http_settings=http_settings),
        crm_connector=CRMConnector(url=source_settings.crm_api_url, http_settings=http_settings),
        store=get_memory_store(),
    )
