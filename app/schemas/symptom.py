"""
Symptom log and pattern analysis schemas.

Pydantic models for the symptom records supplied by the journal's storage
layer and the derived, per-request pattern summaries.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TrendDirection(str, Enum):
    """Direction of average severity change across a symptom's history."""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


# ============================================================================
# INPUT RECORDS
# ============================================================================

class SymptomRecord(BaseModel):
    """A single logged symptom occurrence."""
    symptom_type: str = Field(..., min_length=1, max_length=200, description="Symptom label, e.g. Headache")
    severity: int = Field(..., ge=1, le=10, description="Severity on a 1-10 scale")
    triggers: Optional[str] = Field(None, max_length=500, description="Suspected triggers, comma or semicolon separated")
    notes: Optional[str] = Field(None, max_length=2000, description="Free-text notes")
    body_part: Optional[str] = Field(None, max_length=100, description="Affected body part")
    logged_at: datetime = Field(..., description="When the symptom occurred")

    @field_validator("logged_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "symptom_type": "Headache",
                "severity": 6,
                "triggers": "Stress, Bright Lights",
                "notes": "Started after lunch",
                "body_part": "Head",
                "logged_at": "2024-01-15T14:30:00Z"
            }
        }


# ============================================================================
# DERIVED PATTERNS
# ============================================================================

class SymptomFrequency(BaseModel):
    """How often a symptom type occurred inside the analysis window."""
    symptom_type: str = Field(..., description="Symptom label as first logged")
    count: int = Field(..., ge=1, description="Occurrences in window")
    avg_severity: float = Field(..., description="Mean severity, one decimal")
    first_occurrence: datetime = Field(..., description="Earliest occurrence in window")
    last_occurrence: datetime = Field(..., description="Latest occurrence in window")


class SeverityTrend(BaseModel):
    """Severity change between the earlier and later half of a symptom's occurrences."""
    symptom_type: str = Field(..., description="Symptom label as first logged")
    trend: TrendDirection = Field(..., description="Trend classification")
    start_avg: float = Field(..., description="Mean severity of the earlier half")
    end_avg: float = Field(..., description="Mean severity of the later half")
    change: float = Field(..., description="end_avg minus start_avg")


class TriggerFrequency(BaseModel):
    """How often a normalized trigger was reported."""
    trigger: str = Field(..., description="Lowercased trigger label")
    count: int = Field(..., ge=1, description="Times reported")
