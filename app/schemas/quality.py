"""
app/schemas/quality.py

Response schemas for the data-quality report.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class FieldQualityResponse(BaseModel):
    model_config = {"from_attributes": True}

    is_valid: bool
    description: str
    original_value: str | bool | int | float | None = None


class RecordQualityResponse(BaseModel):
    model_config = {"from_attributes": True}

    record_id: str
    is_valid: bool
    field_errors: dict[str, FieldQualityResponse] = Field(default_factory=dict)
    error_count: int = Field(..., ge=0)


class QualitySummaryResponse(BaseModel):
    model_config = {"from_attributes": True}

    total_ads_records: int = Field(..., ge=0)
    valid_ads_records: int = Field(..., ge=0)
    ads_quality_score: float = Field(..., ge=0, le=100)
    total_crm_records: int = Field(..., ge=0)
    valid_crm_records: int = Field(..., ge=0)
    crm_quality_score: float = Field(..., ge=0, le=100)
    overall_quality_score: float = Field(..., ge=0, le=100)
    common_issues: list[str] = Field(default_factory=list)
    duplicate_ads_records: int = Field(default=0, ge=0)
    duplicate_crm_records: int = Field(default=0, ge=0)


class DataQualityReportResponse(BaseModel):
    """
    Full quality report as served by ``GET /quality/report``.
    """

    model_config = {"from_attributes": True}

    summary: QualitySummaryResponse
    ads_quality: list[RecordQualityResponse] = Field(default_factory=list)
    crm_quality: list[RecordQualityResponse] = Field(default_factory=list)
    ads_duplicates: list[RecordQualityResponse] = Field(default_factory=list)
    crm_duplicates: list[RecordQualityResponse] = Field(default_factory=list)
    timestamp: datetime
