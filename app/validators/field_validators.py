"""
app/validators/field_validators.py

Per-field validation and coercion for raw ads and CRM records.

Every validator takes ``(value, field_name, quality)``, always writes one
verdict for ``field_name`` into ``quality`` and returns the value to keep.
None of them raise for bad data: missing or malformed input is recorded as
a failing verdict and replaced by a documented fallback.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any

from app.domain.quality import RecordQuality
from app.domain.records import UNKNOWN

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
)

DATETIME_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
)

# strptime accepts unpadded fields; these shapes require two-digit parts.
DATE_SHAPE = re.compile(r"\d{4}[-/]\d{2}[-/]\d{2}")
DATETIME_SHAPE = re.compile(r"\d{4}[-/]\d{2}[-/]\d{2}[T ]\d{2}:\d{2}:\d{2}(\.\d+)?Z?")

VALID_CHANNELS: frozenset[str] = frozenset(
    {"google_ads", "facebook_ads", "tiktok_ads", "linkedin_ads", "twitter_ads"}
)

VALID_STAGES: frozenset[str] = frozenset({"lead", "opportunity", "closed_won", "closed_lost"})

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

ZERO_DATE = date.min
ZERO_DATETIME = datetime.min.replace(tzinfo=timezone.utc)


class FieldValidator:
    """
    Stateless validators for every raw field type.
    """

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def validate_date(self, value: Any, field_name: str, quality: RecordQuality) -> date:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(field_name, "Missing - Date field is empty", value)
            return ZERO_DATE

        raw = str(value)
        for fmt in DATE_FORMATS if DATE_SHAPE.fullmatch(raw) else ():
            try:
                parsed = datetime.strptime(raw, fmt).date()
            except ValueError:
                continue
            quality.record_valid(field_name, "Valid date", value)
            return parsed

        quality.record_invalid(
            field_name,
            "Invalid date format - Expected YYYY-MM-DD or YYYY/MM/DD",
            value,
        )
        return ZERO_DATE

    def validate_datetime(self, value: Any, field_name: str, quality: RecordQuality) -> datetime:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(field_name, "Missing - DateTime field is empty", value)
            return ZERO_DATETIME

        parsed = _parse_datetime(str(value))
        if parsed is None:
            quality.record_invalid(
                field_name,
                "Invalid datetime format - Expected ISO format or YYYY-MM-DD HH:MM:SS",
                value,
            )
            return ZERO_DATETIME

        quality.record_valid(field_name, "Valid datetime", value)
        return parsed

    # ------------------------------------------------------------------
    # Identifiers and enumerations
    # ------------------------------------------------------------------

    def validate_campaign_id(self, value: Any, field_name: str, quality: RecordQuality) -> str:
        return self._validate_identifier(
            value,
            field_name,
            quality,
            missing="Missing - Campaign ID is empty, using 'unknown'",
            valid="Valid campaign ID",
        )

    def validate_opportunity_id(self, value: Any, field_name: str, quality: RecordQuality) -> str:
        return self._validate_identifier(
            value,
            field_name,
            quality,
            missing="Missing - Opportunity ID is empty",
            valid="Valid opportunity ID",
        )

    def validate_channel(self, value: Any, field_name: str, quality: RecordQuality) -> str:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(field_name, "Missing - Channel is empty", value)
            return UNKNOWN

        channel = str(value)
        if channel not in VALID_CHANNELS:
            quality.record_invalid(field_name, f"Unknown channel type: {channel}", value)
            return channel

        quality.record_valid(field_name, "Valid channel", value)
        return channel

    def validate_stage(self, value: Any, field_name: str, quality: RecordQuality) -> str:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(field_name, "Missing - Stage is empty", value)
            return UNKNOWN

        stage = str(value)
        if stage not in VALID_STAGES:
            quality.record_invalid(field_name, f"Unknown stage: {stage}", value)
            return stage

        quality.record_valid(field_name, "Valid stage", value)
        return stage

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def validate_clicks(self, value: Any, field_name: str, quality: RecordQuality) -> int:
        return int(
            self._validate_non_negative(
                value, field_name, quality, label="Clicks", valid="Valid clicks count", whole=True
            )
        )

    def validate_impressions(self, value: Any, field_name: str, quality: RecordQuality) -> int:
        return int(
            self._validate_non_negative(
                value,
                field_name,
                quality,
                label="Impressions",
                valid="Valid impressions count",
                whole=True,
            )
        )

    def validate_cost(self, value: Any, field_name: str, quality: RecordQuality) -> float:
        return float(
            self._validate_non_negative(value, field_name, quality, label="Cost", valid="Valid cost amount")
        )

    def validate_amount(self, value: Any, field_name: str, quality: RecordQuality) -> float:
        return float(
            self._validate_non_negative(value, field_name, quality, label="Amount", valid="Valid amount")
        )

    # ------------------------------------------------------------------
    # Contact and attribution
    # ------------------------------------------------------------------

    def validate_email(self, value: Any, field_name: str, quality: RecordQuality) -> str:
        _require_quality(quality)
        email = "" if value is None else str(value)
        if _is_blank(email):
            quality.record_invalid(field_name, "Missing - Email is empty", value)
            return email

        if not EMAIL_PATTERN.match(email):
            quality.record_invalid(field_name, "Invalid email format", value)
            return email

        quality.record_valid(field_name, "Valid email", value)
        return email

    def validate_utm_campaign(self, value: Any, field_name: str, quality: RecordQuality) -> str:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(
                field_name, "Missing - UTM Campaign is empty, using 'unknown'", value
            )
            return UNKNOWN

        quality.record_valid(field_name, "Valid UTM campaign", value)
        return str(value)

    def validate_utm_source(self, value: str | None, field_name: str, quality: RecordQuality) -> str:
        return self._validate_optional_utm(value, field_name, quality, label="Source")

    def validate_utm_medium(self, value: str | None, field_name: str, quality: RecordQuality) -> str:
        return self._validate_optional_utm(value, field_name, quality, label="Medium")

    # ------------------------------------------------------------------
    # Shared rules
    # ------------------------------------------------------------------

    def _validate_identifier(
        self,
        value: Any,
        field_name: str,
        quality: RecordQuality,
        *,
        missing: str,
        valid: str,
    ) -> str:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(field_name, missing, value)
            return UNKNOWN

        quality.record_valid(field_name, valid, value)
        return str(value)

    def _validate_non_negative(
        self,
        value: Any,
        field_name: str,
        quality: RecordQuality,
        *,
        label: str,
        valid: str,
        whole: bool = False,
    ) -> float:
        _require_quality(quality)
        number = _as_number(value)
        if number is None:
            quality.record_invalid(
                field_name, f"Invalid - {label} is not a number, setting to 0", value
            )
            return 0
        if whole and not float(number).is_integer():
            quality.record_invalid(
                field_name, f"Invalid - {label} must be a whole number, setting to 0", value
            )
            return 0
        if number < 0:
            quality.record_invalid(
                field_name, f"Invalid - {label} cannot be negative, setting to 0", value
            )
            return 0

        quality.record_valid(field_name, valid, value)
        return number

    def _validate_optional_utm(
        self,
        value: str | None,
        field_name: str,
        quality: RecordQuality,
        *,
        label: str,
    ) -> str:
        _require_quality(quality)
        if _is_blank(value):
            quality.record_invalid(
                field_name,
                f"Missing - UTM {label} is null or empty, using 'unknown'",
                value,
            )
            return UNKNOWN

        quality.record_valid(field_name, f"Valid UTM {label.lower()}", value)
        return str(value).strip()


def _require_quality(quality: RecordQuality) -> None:
    if quality is None:
        raise TypeError("A RecordQuality accumulator is required.")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return str(value).strip() == ""


def _as_number(value: Any) -> int | float | None:
    """Return a finite number from *value*, or None when it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number: int | float = value
        if isinstance(value, int):
            try:
                float(value)
            except OverflowError:
                return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def _parse_datetime(raw: str) -> datetime | None:
    for fmt in DATETIME_FORMATS if DATETIME_SHAPE.fullmatch(raw) else ():
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    # ISO-8601 with an explicit offset.
    if "T" not in raw:
        return None
    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None
