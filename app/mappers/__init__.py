"""
app/mappers package marker.
"""

from app.mappers.record_normalizer import RecordNormalizer, build_utm_key

__all__ = [
    "RecordNormalizer",
    "build_utm_key",
]
