"""
tests/test_field_validators.py

Pytest unit tests for FieldValidator.

Every validator must write exactly one verdict for its field, count
failures, and return the documented fallback instead of raising.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from app.domain.quality import RecordQuality
from app.validators.field_validators import ZERO_DATE, ZERO_DATETIME, FieldValidator


@pytest.fixture()
def v() -> FieldValidator:
    return FieldValidator()


@pytest.fixture()
def quality() -> RecordQuality:
    return RecordQuality(record_id="test_0")


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class TestDate:
    @pytest.mark.parametrize("raw", ["2025-08-01", "2025/08/01"])
    def test_accepted_formats(self, v: FieldValidator, quality: RecordQuality, raw: str) -> None:
        assert v.validate_date(raw, "date", quality) == date(2025, 8, 1)
        assert quality.field_errors["date"].is_valid
        assert quality.field_errors["date"].description == "Valid date"
        assert quality.error_count == 0

    def test_empty_is_missing(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_date("", "date", quality) == ZERO_DATE
        entry = quality.field_errors["date"]
        assert not entry.is_valid
        assert entry.description.startswith("Missing")
        assert quality.error_count == 1

    @pytest.mark.parametrize("raw", ["2025-8-1", "2025/8/01", "25-08-01"])
    def test_unpadded_parts_are_rejected(self, v: FieldValidator, quality: RecordQuality, raw: str) -> None:
        assert v.validate_date(raw, "date", quality) == ZERO_DATE
        assert not quality.field_errors["date"].is_valid

    def test_unparseable_names_formats(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_date("01-08-2025", "date", quality) == ZERO_DATE
        entry = quality.field_errors["date"]
        assert "YYYY-MM-DD" in entry.description
        assert entry.original_value == "01-08-2025"


class TestDateTime:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2025-08-01T10:00:00Z", datetime(2025, 8, 1, 10, 0, tzinfo=timezone.utc)),
            ("2025-08-01T10:00:00.250Z", datetime(2025, 8, 1, 10, 0, 0, 250000, tzinfo=timezone.utc)),
            ("2025-08-01 10:00:00", datetime(2025, 8, 1, 10, 0, tzinfo=timezone.utc)),
            ("2025/08/01 10:00:00", datetime(2025, 8, 1, 10, 0, tzinfo=timezone.utc)),
        ],
    )
    def test_accepted_formats(
        self, v: FieldValidator, quality: RecordQuality, raw: str, expected: datetime
    ) -> None:
        assert v.validate_datetime(raw, "created_at", quality) == expected
        assert quality.field_errors["created_at"].description == "Valid datetime"

    def test_offset_is_converted_to_utc(self, v: FieldValidator, quality: RecordQuality) -> None:
        parsed = v.validate_datetime("2025-08-01T23:30:00-02:00", "created_at", quality)
        assert parsed == datetime(2025, 8, 2, 1, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "raw", ["0001-01-01T00:30:00+01:00", "9999-12-31T23:30:00-01:00"]
    )
    def test_offset_outside_utc_range_is_invalid(
        self, v: FieldValidator, quality: RecordQuality, raw: str
    ) -> None:
        assert v.validate_datetime(raw, "created_at", quality) == ZERO_DATETIME
        assert quality.field_errors["created_at"].description == (
            "Invalid datetime format - Expected ISO format or YYYY-MM-DD HH:MM:SS"
        )

    def test_unpadded_datetime_is_rejected(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_datetime("2025-8-1 10:00:00", "created_at", quality) == ZERO_DATETIME

    def test_date_only_is_rejected(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_datetime("2025-08-01", "created_at", quality) == ZERO_DATETIME
        assert not quality.field_errors["created_at"].is_valid

    def test_missing(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_datetime("  ", "created_at", quality) == ZERO_DATETIME
        assert quality.field_errors["created_at"].description.startswith("Missing")


# ---------------------------------------------------------------------------
# Identifiers and enumerations
# ---------------------------------------------------------------------------


class TestIdentifiers:
    def test_blank_campaign_id_falls_back(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_campaign_id("   ", "campaign_id", quality) == "unknown"
        assert quality.error_count == 1

    def test_opportunity_id_passes_through(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_opportunity_id("OPP-9", "opportunity_id", quality) == "OPP-9"
        assert quality.field_errors["opportunity_id"].is_valid


class TestChannel:
    def test_known_channel(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_channel("tiktok_ads", "channel", quality) == "tiktok_ads"
        assert quality.field_errors["channel"].description == "Valid channel"

    def test_unknown_channel_is_preserved(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_channel("bing_ads", "channel", quality) == "bing_ads"
        entry = quality.field_errors["channel"]
        assert not entry.is_valid
        assert entry.description == "Unknown channel type: bing_ads"

    def test_matching_is_case_sensitive(self, v: FieldValidator, quality: RecordQuality) -> None:
        v.validate_channel("Google_Ads", "channel", quality)
        assert not quality.field_errors["channel"].is_valid

    def test_missing_channel(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_channel("", "channel", quality) == "unknown"
        assert quality.field_errors["channel"].description == "Missing - Channel is empty"


class TestStage:
    @pytest.mark.parametrize("stage", ["lead", "opportunity", "closed_won", "closed_lost"])
    def test_known_stages(self, v: FieldValidator, quality: RecordQuality, stage: str) -> None:
        assert v.validate_stage(stage, "stage", quality) == stage
        assert quality.error_count == 0

    def test_unknown_stage_is_preserved(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_stage("negotiation", "stage", quality) == "negotiation"
        assert quality.field_errors["stage"].description == "Unknown stage: negotiation"

    def test_missing_stage(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_stage(None, "stage", quality) == "unknown"


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestNumbers:
    def test_negative_clicks_become_zero(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_clicks(-5, "clicks", quality) == 0
        entry = quality.field_errors["clicks"]
        assert entry.description == "Invalid - Clicks cannot be negative, setting to 0"
        assert entry.original_value == -5

    def test_zero_is_valid(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_impressions(0, "impressions", quality) == 0
        assert quality.field_errors["impressions"].is_valid

    def test_numeric_string_is_accepted(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_cost("12.5", "cost", quality) == pytest.approx(12.5)
        assert quality.field_errors["cost"].description == "Valid cost amount"

    @pytest.mark.parametrize("raw", ["abc", None, True, float("nan")])
    def test_non_numbers_become_zero(self, v: FieldValidator, quality: RecordQuality, raw: object) -> None:
        assert v.validate_amount(raw, "amount", quality) == 0.0
        assert quality.field_errors["amount"].description == "Invalid - Amount is not a number, setting to 0"

    @pytest.mark.parametrize("field", ["clicks", "impressions", "cost", "amount"])
    def test_integer_beyond_float_range_becomes_zero(
        self, v: FieldValidator, quality: RecordQuality, field: str
    ) -> None:
        validate = getattr(v, f"validate_{field}")
        assert validate(10**400, field, quality) == 0
        entry = quality.field_errors[field]
        assert not entry.is_valid
        assert entry.description.endswith("is not a number, setting to 0")

    def test_fractional_clicks_rejected(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_clicks(2.5, "clicks", quality) == 0
        assert "whole number" in quality.field_errors["clicks"].description

    def test_whole_float_clicks_accepted(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_clicks(7.0, "clicks", quality) == 7
        assert isinstance(v.validate_clicks(7.0, "clicks", quality), int)


# ---------------------------------------------------------------------------
# Contact and attribution
# ---------------------------------------------------------------------------


class TestEmail:
    def test_invalid_email_is_kept(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_email("not-an-email", "contact_email", quality) == "not-an-email"
        entry = quality.field_errors["contact_email"]
        assert not entry.is_valid
        assert entry.description == "Invalid email format"

    def test_empty_email_not_defaulted(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_email("", "contact_email", quality) == ""
        assert quality.field_errors["contact_email"].description == "Missing - Email is empty"

    def test_valid_email(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_email("a.b+c@mail.example.org", "contact_email", quality) == "a.b+c@mail.example.org"
        assert quality.error_count == 0


class TestUTM:
    def test_campaign_is_not_trimmed(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_utm_campaign(" summer ", "utm_campaign", quality) == " summer "

    def test_blank_campaign_falls_back(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_utm_campaign("  ", "utm_campaign", quality) == "unknown"
        assert not quality.field_errors["utm_campaign"].is_valid

    def test_source_is_trimmed(self, v: FieldValidator, quality: RecordQuality) -> None:
        assert v.validate_utm_source(" google ", "utm_source", quality) == "google"
        assert quality.field_errors["utm_source"].description == "Valid UTM source"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_absent_medium_falls_back(self, v: FieldValidator, quality: RecordQuality, raw: str | None) -> None:
        assert v.validate_utm_medium(raw, "utm_medium", quality) == "unknown"
        assert (
            quality.field_errors["utm_medium"].description
            == "Missing - UTM Medium is null or empty, using 'unknown'"
        )


def test_missing_accumulator_is_a_type_error(v: FieldValidator) -> None:
    with pytest.raises(TypeError):
        v.validate_channel("google_ads", "channel", None)  # type: ignore[arg-type]


def test_each_call_writes_one_entry_per_field(v: FieldValidator, quality: RecordQuality) -> None:
    v.validate_clicks(-1, "clicks", quality)
    v.validate_clicks(3, "clicks", quality)
    assert list(quality.field_errors) == ["clicks"]
    assert quality.field_errors["clicks"].is_valid
