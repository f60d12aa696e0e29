"""
app/schemas package marker.
"""

from app.schemas.export import ExportRecordResponse, ExportRunResponse
from app.schemas.ingestion import IngestionRunResponse
from app.schemas.metrics import (
    ChannelMetricsPage,
    ChannelMetricsResponse,
    FunnelMetricsPage,
    FunnelMetricsResponse,
)
from app.schemas.quality import (
    DataQualityReportResponse,
    FieldQualityResponse,
    QualitySummaryResponse,
    RecordQualityResponse,
)

__all__ = [
    "ExportRecordResponse",
    "ExportRunResponse",
    "IngestionRunResponse",
    "ChannelMetricsPage",
    "ChannelMetricsResponse",
    "FunnelMetricsPage",
    "FunnelMetricsResponse",
    "DataQualityReportResponse",
    "FieldQualityResponse",
    "QualitySummaryResponse",
    "RecordQualityResponse",
]
