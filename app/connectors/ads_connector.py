"""
app/connectors/ads_connector.py

Advertising performance feed connector.
"""

from __future__ import annotations

from typing import Any, Mapping

import requests

from app.config import ExternalHTTPSettings
from app.connectors.base import FeedConnector
from app.domain.records import RawAdsRecord


class AdsConnector(FeedConnector[RawAdsRecord]):
    """
    Reads ``external.ads.performance`` from the ads feed.
    """

    envelope_path = ("external", "ads", "performance")

    def __init__(
        self,
        *,
        url: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="ads", url=url, http_settings=http_settings, session=session)

    def parse_entry(self, entry: Mapping[str, Any]) -> RawAdsRecord:
        return RawAdsRecord.from_payload(entry)
