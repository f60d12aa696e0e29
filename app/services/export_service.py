"""
app/services/export_service.py

Daily export of channel metrics to an external sink.

Each :class:`ChannelMetrics` row becomes one :class:`ExportRecord` with
``campaign_id="aggregated"``. When a sink is configured every row is posted
on its own, as compact JSON in field order, with an ``X-Signature`` header
of the form ``sha256=<hex>`` (HMAC-SHA256 of the exact body bytes).
"""

from __future__ import annotations

import dataclasses
import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Sequence

from app.config import get_export_sink_settings, get_external_http_settings
from app.connectors.base import ConnectorRequestError
from app.connectors.sink_client import ExportSinkClient
from app.domain.metrics import ChannelMetrics, ExportRecord
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

AGGREGATED_CAMPAIGN_ID = "aggregated"
SIGNATURE_PREFIX = "sha256="


class ExportError(RuntimeError):
    """
    Raised when there is nothing to export or the sink rejects a row.
    """


@dataclass(frozen=True)
class ExportOutcome:
    """
    Rows produced for one export run and how many reached the sink.
    """

    records: list[ExportRecord]
    sent: int = 0


def to_export_records(metrics: Sequence[ChannelMetrics]) -> list[ExportRecord]:
    """
    Flatten channel metrics to export rows, one per input, in input order.
    """

    return [
        ExportRecord(
            date=row.date,
            channel=row.channel,
            campaign_id=AGGREGATED_CAMPAIGN_ID,
            clicks=row.clicks,
            impressions=row.impressions,
            cost=row.cost,
            leads=row.leads,
            opportunities=row.opportunities,
            closed_won=row.closed_won,
            revenue=row.revenue,
            cpc=row.cpc,
            cpa=row.cpa,
            cvr_lead_to_opp=row.cvr_lead_to_opp,
            cvr_opp_to_won=row.cvr_opp_to_won,
            roas=row.roas,
        )
        for row in metrics
    ]


def serialize_record(record: ExportRecord) -> bytes:
    """Compact JSON body for *record*, keys in dataclass field order."""
    payload: dict[str, Any] = dataclasses.asdict(record)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def sign_payload(body: bytes, secret: str) -> str:
    """Return ``sha256=<hex digest>`` of *body* keyed with *secret*."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


class ExportService:
    """
    Converts metrics to export rows and posts them to the configured sink.

    With no sink client the rows are only returned, nothing is sent.
    """

    def __init__(
        self,
        *,
        sink_client: ExportSinkClient | None = None,
        secret: str | None = None,
    ) -> None:
        if sink_client is not None and not secret:
            raise ValueError("An export secret is required when a sink client is configured.")
        self._sink_client = sink_client
        self._secret = secret or ""

    @property
    def sink_enabled(self) -> bool:
        return self._sink_client is not None

    def export_daily_records(self, metrics: Sequence[ChannelMetrics]) -> ExportOutcome:
        records = to_export_records(metrics)
        if not records:
            raise ExportError("No records to export.")

        if self._sink_client is None:
            logger.info("Export sink not configured; skipping delivery of %d rows", len(records))
            return ExportOutcome(records=records, sent=0)

        sent = 0
        for record in records:
            body = serialize_record(record)
            try:
                self._sink_client.post_record(body, signature=sign_payload(body, self._secret))
            except ConnectorRequestError as exc:
                logger.error(
                    "Export row rejected date=%s channel=%s error=%s",
                    record.date,
                    record.channel,
                    exc,
                )
                raise ExportError(f"Failed to export record for {record.date}/{record.channel}.") from exc
            sent += 1
            log_event(
                logger,
                logging.INFO,
                "export_record_sent",
                date=record.date,
                channel=record.channel,
            )

        return ExportOutcome(records=records, sent=sent)


@lru_cache(maxsize=1)
def get_export_service() -> ExportService:
    """
    Build and cache the export service; delivery is off without ``SINK_URL``.
    """

    sink_settings = get_export_sink_settings()
    if not sink_settings.enabled or sink_settings.sink_url is None:
        return ExportService()
    return ExportService(
        sink_client=ExportSinkClient(
            url=sink_settings.sink_url,
            http_settings=get_external_http_settings(),
        ),
        secret=sink_settings.sink_secret,
    )
