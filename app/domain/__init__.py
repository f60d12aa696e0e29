"""
app/domain package marker.
"""

from app.domain.metrics import ChannelMetrics, ExportRecord, FunnelMetrics
from app.domain.quality import DataQualityReport, FieldQuality, QualitySummary, RecordQuality
from app.domain.records import NormalizedAdsRecord, NormalizedCRMRecord, RawAdsRecord, RawCRMRecord

__all__ = [
    "ChannelMetrics",
    "DataQualityReport",
    "ExportRecord",
    "FieldQuality",
    "FunnelMetrics",
    "NormalizedAdsRecord",
    "NormalizedCRMRecord",
    "QualitySummary",
    "RawAdsRecord",
    "RawCRMRecord",
    "RecordQuality",
]
