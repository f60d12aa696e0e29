"""
tests/conftest.py

Shared builders for raw and normalized records.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord, RawAdsRecord, RawCRMRecord
from app.mappers.record_normalizer import RecordNormalizer


def _ads_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "date": "2025-08-01",
        "campaign_id": "C1",
        "channel": "google_ads",
        "clicks": 100,
        "impressions": 1000,
        "cost": 50.0,
        "utm_campaign": "summer",
        "utm_source": "google",
        "utm_medium": "cpc",
    }
    payload.update(overrides)
    return payload


def _crm_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "opportunity_id": "O1",
        "contact_email": "jane@example.com",
        "stage": "lead",
        "amount": 0.0,
        "created_at": "2025-08-01T10:00:00Z",
        "utm_campaign": "summer",
        "utm_source": "google",
        "utm_medium": "cpc",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def normalizer() -> RecordNormalizer:
    return RecordNormalizer()


@pytest.fixture()
def raw_ads() -> Callable[..., RawAdsRecord]:
    """Build a valid raw ads record with selected fields overridden."""
    return lambda **overrides: RawAdsRecord.from_payload(_ads_payload(**overrides))


@pytest.fixture()
def raw_crm() -> Callable[..., RawCRMRecord]:
    """Build a valid raw CRM record with selected fields overridden."""
    return lambda **overrides: RawCRMRecord.from_payload(_crm_payload(**overrides))


@pytest.fixture()
def ads_record(normalizer: RecordNormalizer) -> Callable[..., NormalizedAdsRecord]:
    """Build a normalized ads record from overrides."""

    def build(index: int = 0, **overrides: Any) -> NormalizedAdsRecord:
        return normalizer.normalize_ads_record(RawAdsRecord.from_payload(_ads_payload(**overrides)), index)

    return build


@pytest.fixture()
def crm_record(normalizer: RecordNormalizer) -> Callable[..., NormalizedCRMRecord]:
    """Build a normalized CRM record from overrides."""

    def build(index: int = 0, **overrides: Any) -> NormalizedCRMRecord:
        return normalizer.normalize_crm_record(RawCRMRecord.from_payload(_crm_payload(**overrides)), index)

    return build


@pytest.fixture()
def ads_payload() -> Callable[..., dict[str, Any]]:
    return _ads_payload


@pytest.fixture()
def crm_payload() -> Callable[..., dict[str, Any]]:
    return _crm_payload
