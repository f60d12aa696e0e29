"""
app/services/deduplication_service.py

Business-key deduplication for normalized batches.

Business keys
-------------
ads : ``YYYY-MM-DD|campaign_id|channel``
crm : ``opportunity_id``

The first record for a key (in input order) survives untouched. Every later
record with the same key is removed from the batch; a copy of it, with a
failing ``"duplicate"`` verdict naming the index of the original, is kept in
:attr:`DeduplicationResult.duplicates` so the quality report can list it.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", NormalizedAdsRecord, NormalizedCRMRecord)


@dataclass(frozen=True)
class DeduplicationResult(Generic[RecordT]):
    """
    Survivors in first-occurrence order plus the marked duplicates.
    """

    records: list[RecordT]
    duplicates: list[RecordT] = field(default_factory=list)


class DeduplicationService:
    """
    Single-pass, first-occurrence-wins deduplicator.
    """

    def deduplicate_ads_records(
        self,
        records: Sequence[NormalizedAdsRecord],
    ) -> DeduplicationResult[NormalizedAdsRecord]:
        return _deduplicate(records, message="Duplicate record found (original at index {index})")

    def deduplicate_crm_records(
        self,
        records: Sequence[NormalizedCRMRecord],
    ) -> DeduplicationResult[NormalizedCRMRecord]:
        return _deduplicate(
            records,
            message="Duplicate opportunity ID found (original at index {index})",
        )


def _deduplicate(records: Sequence[RecordT], *, message: str) -> DeduplicationResult[RecordT]:
    seen: dict[str, int] = {}
    unique: list[RecordT] = []
    duplicates: list[RecordT] = []

    for index, record in enumerate(records):
        key = record.business_key
        original_index = seen.get(key)
        if original_index is None:
            seen[key] = index
            unique.append(record)
            continue

        quality = record.quality.copy()
        quality.mark_duplicate(description=message.format(index=original_index), business_key=key)
        duplicates.append(dataclasses.replace(record, quality=quality))

    if duplicates:
        logger.debug("Dropped %d duplicate records out of %d", len(duplicates), len(records))
    return DeduplicationResult(records=unique, duplicates=duplicates)
