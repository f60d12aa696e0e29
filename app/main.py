from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

_VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _validate_env() -> None:
    """
    Validate environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.

    Rules:
    - ADS_API_URL and CRM_API_URL may be left unset but not set to blank.
    - SINK_SECRET is required whenever SINK_URL is set.
    - LOG_LEVEL must name a standard logging level.
    """

    from app.config import load_env_files

    load_env_files()

    errors: list[str] = []

    # --- Feed URLs ------------------------------------------------------
    for name in ("ADS_API_URL", "CRM_API_URL"):
        raw_value = os.getenv(name)
        if raw_value is not None and not raw_value.strip():
            errors.append(f"{name} is set but empty. Unset it to use the default feed or provide a URL.")

    # --- Export sink ----------------------------------------------------
    sink_url = os.getenv("SINK_URL", "").strip()
    sink_secret = os.getenv("SINK_SECRET", "").strip()
    if sink_url and not sink_secret:
        errors.append("SINK_SECRET is not set but SINK_URL is. Exports must be signed.")

    # --- Log level ------------------------------------------------------
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL='{log_level}' is not valid. Allowed values: {sorted(_VALID_LOG_LEVELS)}.")

    if errors:
        raise RuntimeError(
            "Startup validation failed, missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Start the ingestion scheduler on boot; shut it down on exit."""
    from app.scheduler.jobs import build_scheduler

    scheduler = build_scheduler()
    scheduler.start()
    logging.getLogger(__name__).info("Scheduler started with %d jobs", len(scheduler.get_jobs()))
    try:
        yield
    finally:
        scheduler.shutdown(wait=True)
        logging.getLogger(__name__).info("Scheduler shut down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Marketing ETL API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        export_router,
        health_router,
        ingestion_router,
        metrics_router,
        quality_router,
    )

    application.include_router(health_router)
    application.include_router(ingestion_router)
    application.include_router(quality_router)
    application.include_router(metrics_router)
    application.include_router(export_router)

    return application


app = create_app()
