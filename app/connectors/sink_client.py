"""
app/connectors/sink_client.py

HTTP client for the signed export sink.
"""

from __future__ import annotations

import requests

from app.config import ExternalHTTPSettings
from app.connectors.base import BaseConnector


class ExportSinkClient(BaseConnector):
    """
    Posts pre-serialized export rows with their signature header.
    """

    def __init__(
        self,
        *,
        url: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="export_sink", http_settings=http_settings, session=session)
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def post_record(self, body: bytes, *, signature: str) -> None:
        self._request(
            method="POST",
            url=self._url,
            headers={"Content-Type": "application/json", "X-Signature": signature},
            data=body,
        )
