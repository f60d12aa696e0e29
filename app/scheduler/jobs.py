"""
app/scheduler/jobs.py

APScheduler-based periodic ingestion.

When ``INGEST_SCHEDULE_MINUTES`` is positive, ``build_scheduler()`` registers
one interval job that re-runs the full ingestion pipeline. A failed run is
logged and the previous store contents stay in place; the next tick tries
again.

Lifecycle
----------
Call ``build_scheduler()`` once to get a configured ``BackgroundScheduler``.
Start it on app boot; shut it down gracefully on app shutdown.
The scheduler is wired into FastAPI via the ``lifespan`` context in main.py.
"""

from __future__ import annotations

import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler

from app.config import get_ingestion_settings
from app.services.ingestion_service import IngestionService, get_ingestion_service

logger = logging.getLogger(__name__)

INGESTION_JOB_ID = "periodic_ingestion"


def run_scheduled_ingestion(
    service_factory: Callable[[], IngestionService] = get_ingestion_service,
) -> None:
    """
    Run one ingestion pass; never raises so the scheduler keeps ticking.
    """

    logger.info("Scheduler: periodic_ingestion starting")
    try:
        result = service_factory().run()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Scheduler: periodic_ingestion failed: %s", exc)
        return

    logger.info(
        "Scheduler: periodic_ingestion complete ads=%d crm=%d overall_quality=%.2f",
        result.ads_records,
        result.crm_records,
        result.quality_summary.overall_quality_score,
    )


def build_scheduler(schedule_minutes: int | None = None) -> BackgroundScheduler:
    """
    Build the scheduler with the ingestion job registered when enabled.

    Returns a configured but *not yet started* ``BackgroundScheduler``.
    With a non-positive interval the scheduler carries no jobs.
    """

    interval = get_ingestion_settings().schedule_minutes if schedule_minutes is None else schedule_minutes
    scheduler = BackgroundScheduler(timezone="UTC")

    if interval > 0:
        scheduler.add_job(
            run_scheduled_ingestion,
            trigger="interval",
            minutes=interval,
            id=INGESTION_JOB_ID,
            name="Periodic ingestion",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=60,
        )
    else:
        logger.info("Scheduler: periodic ingestion disabled (INGEST_SCHEDULE_MINUTES=%d)", interval)

    return scheduler
