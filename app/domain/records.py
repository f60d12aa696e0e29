"""
app/domain/records.py

Raw feed records and their normalized counterparts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from app.domain.quality import RecordQuality

UNKNOWN = "unknown"


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return _text(value)


@dataclass(frozen=True)
class RawAdsRecord:
    """
    One advertising performance row as delivered by the ads feed.

    Numeric fields keep whatever the feed sent; the field validators decide
    whether the value is usable.
    """

    date: str
    campaign_id: str
    channel: str
    clicks: Any
    impressions: Any
    cost: Any
    utm_campaign: str
    utm_source: str | None = None
    utm_medium: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawAdsRecord":
        return cls(
            date=_text(payload.get("date")),
            campaign_id=_text(payload.get("campaign_id")),
            channel=_text(payload.get("channel")),
            clicks=payload.get("clicks", 0),
            impressions=payload.get("impressions", 0),
            cost=payload.get("cost", 0.0),
            utm_campaign=_text(payload.get("utm_campaign")),
            utm_source=_optional_text(payload.get("utm_source")),
            utm_medium=_optional_text(payload.get("utm_medium")),
        )


@dataclass(frozen=True)
class RawCRMRecord:
    """
    One CRM opportunity row as delivered by the CRM feed.
    """

    opportunity_id: str
    contact_email: str
    stage: str
    amount: Any
    created_at: str
    utm_campaign: str
    utm_source: str | None = None
    utm_medium: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawCRMRecord":
        return cls(
            opportunity_id=_text(payload.get("opportunity_id")),
            contact_email=_text(payload.get("contact_email")),
            stage=_text(payload.get("stage")),
            amount=payload.get("amount", 0.0),
            created_at=_text(payload.get("created_at")),
            utm_campaign=_text(payload.get("utm_campaign")),
            utm_source=_optional_text(payload.get("utm_source")),
            utm_medium=_optional_text(payload.get("utm_medium")),
        )


@dataclass(frozen=True)
class NormalizedAdsRecord:
    """
    Validated advertising row with its quality verdict and attribution key.
    """

    date: date
    campaign_id: str
    channel: str
    clicks: int
    impressions: int
    cost: float
    utm_campaign: str
    utm_source: str
    utm_medium: str
    utm_key: str
    quality: RecordQuality

    @property
    def business_key(self) -> str:
        return f"{self.date.isoformat()}|{self.campaign_id}|{self.channel}"


@dataclass(frozen=True)
class NormalizedCRMRecord:
    """
    Validated CRM opportunity with its quality verdict and attribution key.
    """

    opportunity_id: str
    contact_email: str
    stage: str
    amount: float
    created_at: datetime
    utm_campaign: str
    utm_source: str
    utm_medium: str
    utm_key: str
    quality: RecordQuality

    @property
    def business_key(self) -> str:
        return self.opportunity_id

    @property
    def created_on(self) -> date:
        """Calendar day of ``created_at`` used for date joins and filters."""
        return self.created_at.date()
