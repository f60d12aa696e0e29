"""
app/connectors/crm_connector.py

CRM opportunity feed connector.
"""

from __future__ import annotations

from typing import Any, Mapping

import requests

from app.config import ExternalHTTPSettings
from app.connectors.base import FeedConnector
from app.domain.records import RawCRMRecord


class CRMConnector(FeedConnector[RawCRMRecord]):
    """
    Reads ``external.crm.opportunities`` from the CRM feed.
    """

    envelope_path = ("external", "crm", "opportunities")

    def __init__(
        self,
        *,
        url: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="crm", url=url, http_settings=http_settings, session=session)

    def parse_entry(self, entry: Mapping[str, Any]) -> RawCRMRecord:
        return RawCRMRecord.from_payload(entry)
