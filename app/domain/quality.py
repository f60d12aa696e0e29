"""
app/domain/quality.py

Per-field and per-record data-quality verdicts.

A ``RecordQuality`` is a builder scoped to one record's normalization:
field validators write one ``FieldQuality`` entry per field into it, the
normalizer finalizes it, and only the deduplicator may append a
``"duplicate"`` entry afterwards (on a copy of the record it drops).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

OriginalValue = Union[str, int, float, bool, None]
"""Raw input preserved for audit. The raw schemas only carry these types."""

DUPLICATE_FIELD = "duplicate"


def as_original_value(value: object) -> OriginalValue:
    """
    Narrow an arbitrary raw value to the closed ``OriginalValue`` set.

    Anything outside ``str | int | float | bool | None`` is stringified.
    """

    if value is None or isinstance(value, (str, bool, int, float)):
        return value  # type: ignore[return-value]
    return str(value)


@dataclass(frozen=True)
class FieldQuality:
    """
    Validation verdict for one field.
    """

    is_valid: bool
    description: str
    original_value: OriginalValue = None


@dataclass
class RecordQuality:
    """
    Validation verdict for one record, accumulated field by field.
    """

    record_id: str
    is_valid: bool = True
    field_errors: dict[str, FieldQuality] = field(default_factory=dict)
    error_count: int = 0

    def record_valid(self, field_name: str, description: str, original_value: object) -> None:
        """Write a passing verdict for *field_name*."""
        self.field_errors[field_name] = FieldQuality(
            is_valid=True,
            description=description,
            original_value=as_original_value(original_value),
        )

    def record_invalid(self, field_name: str, description: str, original_value: object) -> None:
        """Write a failing verdict for *field_name* and count the error."""
        self.field_errors[field_name] = FieldQuality(
            is_valid=False,
            description=description,
            original_value=as_original_value(original_value),
        )
        self.error_count += 1

    def finalize(self) -> "RecordQuality":
        """Derive ``is_valid`` from the error count once all fields are written."""
        self.is_valid = self.error_count == 0
        return self

    def mark_duplicate(self, *, description: str, business_key: str) -> None:
        """Append the duplicate verdict and force the record invalid."""
        self.record_invalid(DUPLICATE_FIELD, description, business_key)
        self.is_valid = False

    def copy(self) -> "RecordQuality":
        return RecordQuality(
            record_id=self.record_id,
            is_valid=self.is_valid,
            field_errors=dict(self.field_errors),
            error_count=self.error_count,
        )

    def invalid_descriptions(self) -> list[str]:
        """Descriptions of every failing field entry."""
        return [entry.description for entry in self.field_errors.values() if not entry.is_valid]


@dataclass(frozen=True)
class QualitySummary:
    """
    Dataset-level quality scores for one ads batch and one CRM batch.
    """

    total_ads_records: int
    valid_ads_records: int
    ads_quality_score: float
    total_crm_records: int
    valid_crm_records: int
    crm_quality_score: float
    overall_quality_score: float
    common_issues: list[str] = field(default_factory=list)
    duplicate_ads_records: int = 0
    duplicate_crm_records: int = 0


@dataclass(frozen=True)
class DataQualityReport:
    """
    Full quality report: summary plus every surviving record's verdict.

    Dropped duplicates are listed separately and never count toward scores.
    """

    summary: QualitySummary
    ads_quality: list[RecordQuality]
    crm_quality: list[RecordQuality]
    timestamp: datetime
    ads_duplicates: list[RecordQuality] = field(default_factory=list)
    crm_duplicates: list[RecordQuality] = field(default_factory=list)
