"""
app/services package marker.
"""

from app.services.deduplication_service import DeduplicationResult, DeduplicationService
from app.services.export_service import ExportError, ExportOutcome, ExportService, get_export_service
from app.services.ingestion_service import (
    IngestionFetchError,
    IngestionResult,
    IngestionService,
    get_ingestion_service,
)
from app.services.metrics_service import MetricsService, get_metrics_service
from app.services.quality_service import QualityService, get_quality_service

__all__ = [
    "DeduplicationResult",
    "DeduplicationService",
    "ExportError",
    "ExportOutcome",
    "ExportService",
    "get_export_service",
    "IngestionFetchError",
    "IngestionResult",
    "IngestionService",
    "get_ingestion_service",
    "MetricsService",
    "get_metrics_service",
    "QualityService",
    "get_quality_service",
]
