"""
app/connectors/base.py

Base connector abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

import requests

from app.config import ExternalHTTPSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

RawT = TypeVar("RawT")


class ConnectorRequestError(RuntimeError):
    """
    Raised when a connector cannot fetch or deliver data after retries.
    """


@dataclass(frozen=True)
class ConnectorFetchResult(Generic[RawT]):
    """
    Connector fetch outcome with parsed raw records.

    ``failed_records`` counts envelope entries that were not JSON objects.
    """

    source: str
    records: list[RawT] = field(default_factory=list)
    failed_records: int = 0


class BaseConnector(ABC):
    """
    Shared retrying HTTP client for feed connectors and the export sink.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Execute an HTTP request and return parsed JSON with retry support.
        """

        response = self._request(method=method, url=url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise ConnectorRequestError(f"{self.source}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        data: bytes | None = None,
    ) -> requests.Response:
        """
        Execute an HTTP request with exponential backoff on transient failures.
        """

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    headers=headers,
                    data=data,
                    timeout=self._timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                is_retryable = status_code in RETRYABLE_STATUS_CODES
                if not is_retryable:
                    logger.error(
                        "Upstream %s rejected request status=%s url=%s error=%s",
                        self.source,
                        status_code,
                        url,
                        exc,
                    )
                    raise ConnectorRequestError(f"{self.source}: non-retryable request failure.") from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Upstream %s unavailable, retrying attempt=%s/%s wait_seconds=%.2f url=%s",
                self.source,
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        logger.error(
            "Upstream %s still failing after retries url=%s error=%s",
            self.source,
            url,
            last_error,
        )
        raise ConnectorRequestError(f"{self.source}: request failed after retries.") from last_error


class FeedConnector(BaseConnector, Generic[RawT]):
    """
    Connector for a JSON feed wrapping its records in a nested envelope.

    Subclasses name the envelope path and how one entry becomes a raw record.
    """

    envelope_path: tuple[str, ...] = ()

    def __init__(
        self,
        *,
        source: str,
        url: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source=source, http_settings=http_settings, session=session)
        self._url = url

    @abstractmethod
    def parse_entry(self, entry: Mapping[str, Any]) -> RawT:
        """
        Build one raw record from a feed entry.
        """

    def fetch_records(self) -> ConnectorFetchResult[RawT]:
        payload = self._request_json(method="GET", url=self._url)
        entries = self._unwrap(payload)

        records: list[RawT] = []
        failed_records = 0
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                failed_records += 1
                logger.warning("Skipping non-object feed entry source=%s index=%s", self.source, index)
                continue
            records.append(self.parse_entry(entry))

        logger.info("Fetched %s records source=%s failed=%s", len(records), self.source, failed_records)
        return ConnectorFetchResult(source=self.source, records=records, failed_records=failed_records)

    def _unwrap(self, payload: Any) -> list[Any]:
        node = payload
        for key in self.envelope_path:
            if not isinstance(node, dict):
                break
            node = node.get(key)
        if not isinstance(node, list):
            path = ".".join(self.envelope_path)
            raise ConnectorRequestError(f"{self.source}: response has no list at '{path}'.")
        return node
