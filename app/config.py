"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_DEFAULT_ADS_API_URL = "https://mocki.io/v1/9dcc2981-2bc8-465a-bce3-47767e1278e6"
_DEFAULT_CRM_API_URL = "https://mocki.io/v1/6a064f10-829d-432c-9f0d-24d5b8cb71c7"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class SourceSettings:
    """
    Upstream feeds that deliver raw advertising and CRM batches.
    """

    ads_api_url: str = _DEFAULT_ADS_API_URL
    crm_api_url: str = _DEFAULT_CRM_API_URL


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for feed and sink connectors.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_initial_seconds: float = 1.0
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class ExportSinkSettings:
    """
    Destination for signed daily exports. Export is disabled without a URL.
    """

    sink_url: str | None = None
    sink_secret: str | None = None

    @property
    def enabled(self) -> bool:
        return self.sink_url is not None


@dataclass(frozen=True)
class IngestionSettings:
    """
    Runtime settings for ingestion runs and the metrics read side.
    """

    schedule_minutes: int = 0
    default_page_size: int = 10


@lru_cache(maxsize=1)
def get_source_settings() -> SourceSettings:
    """
    Return cached upstream feed settings from environment variables.
    """

    return SourceSettings(
        ads_api_url=_get_str_env("ADS_API_URL", _DEFAULT_ADS_API_URL),
        crm_api_url=_get_str_env("CRM_API_URL", _DEFAULT_CRM_API_URL),
    )


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared connector HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("HTTP_TIMEOUT_SECONDS", 30.0)),
        max_retries=max(0, _get_int_env("HTTP_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(0.0, _get_float_env("HTTP_BACKOFF_INITIAL_SECONDS", 1.0)),
        backoff_multiplier=max(1.0, _get_float_env("HTTP_BACKOFF_MULTIPLIER", 2.0)),
    )


@lru_cache(maxsize=1)
def get_export_sink_settings() -> ExportSinkSettings:
    """
    Return cached export sink settings from environment variables.
    """

    return ExportSinkSettings(
        sink_url=_get_optional_str_env("SINK_URL"),
        sink_secret=_get_optional_str_env("SINK_SECRET"),
    )


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return ingestion and pagination settings.
    """

    return IngestionSettings(
        schedule_minutes=max(0, _get_int_env("INGEST_SCHEDULE_MINUTES", 0)),
        default_page_size=max(1, _get_int_env("METRICS_DEFAULT_PAGE_SIZE", 10)),
    )
