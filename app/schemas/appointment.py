"""
Appointment preparation request/response models.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.symptom import (
    SeverityTrend,
    SymptomFrequency,
    SymptomRecord,
    TriggerFrequency,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionRequest(BaseModel):
    """Request model for appointment question generation."""
    appointment_symptoms: Optional[str] = Field(
        None,
        max_length=2000,
        description="Reason for this specific visit, in the patient's words"
    )
    symptom_logs: list[SymptomRecord] = Field(default_factory=list, description="Symptom history")
    days_to_analyze: Optional[int] = Field(None, ge=1, le=365, description="Trailing window for pattern analysis")
    appointment_date: Optional[datetime] = Field(None, description="Date of the upcoming appointment")
    since: Optional[datetime] = Field(None, description="Previous appointment date; logs before it are ignored")
    reference_time: Optional[datetime] = Field(None, description="Instant the analysis window ends at")

    class Config:
        json_schema_extra = {
            "example": {
                "appointment_symptoms": "Blurred vision",
                "symptom_logs": [
                    {
                        "symptom_type": "Headache",
                        "severity": 4,
                        "triggers": "stress; screen time",
                        "logged_at": "2024-01-02T09:00:00Z"
                    },
                    {
                        "symptom_type": "Headache",
                        "severity": 8,
                        "triggers": "stress",
                        "logged_at": "2024-01-12T18:00:00Z"
                    }
                ],
                "days_to_analyze": 30
            }
        }


class QuestionResponse(BaseModel):
    """Generated appointment questions."""
    questions: list[str] = Field(..., description="Ordered questions, at most 10")
    preview: list[str] = Field(default_factory=list, description="First few questions for compact display")
    symptoms_analyzed: int = Field(..., ge=0, description="Number of logs used after date selection")
    days_analyzed: int = Field(..., ge=1, description="Analysis window in days")
    timestamp: datetime = Field(default_factory=_utcnow)


class QuestionPreviewRequest(BaseModel):
    """Request model for a question list preview."""
    questions: list[str] = Field(default_factory=list, description="Questions to preview")


class QuestionPreviewResponse(BaseModel):
    """Preview of a question list."""
    preview: list[str] = Field(default_factory=list)


class PatternAnalysisRequest(BaseModel):
    """Request model for symptom pattern analysis."""
    symptom_logs: list[SymptomRecord] = Field(default_factory=list, description="Symptom history")
    days_to_analyze: Optional[int] = Field(None, ge=1, le=365, description="Trailing window for frequency and trends")
    reference_time: Optional[datetime] = Field(None, description="Instant the analysis window ends at")


class PatternAnalysisResponse(BaseModel):
    """Frequency, trend and trigger summary of a symptom history."""
    frequencies: list[SymptomFrequency] = Field(default_factory=list)
    trends: list[SeverityTrend] = Field(default_factory=list)
    triggers: list[TriggerFrequency] = Field(default_factory=list)
    window_days: int = Field(..., ge=1)
    timestamp: datetime = Field(default_factory=_utcnow)
