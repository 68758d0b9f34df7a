"""Pydantic schemas for request/response validation."""

from app.schemas.common import ErrorResponse, HealthResponse
from app.schemas.symptom import (
    SeverityTrend,
    SymptomFrequency,
    SymptomRecord,
    TrendDirection,
    TriggerFrequency,
)
from app.schemas.appointment import (
    PatternAnalysisRequest,
    PatternAnalysisResponse,
    QuestionPreviewRequest,
    QuestionPreviewResponse,
    QuestionRequest,
    QuestionResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Symptom
    "SymptomRecord",
    "SymptomFrequency",
    "SeverityTrend",
    "TrendDirection",
    "TriggerFrequency",
    # Appointment
    "QuestionRequest",
    "QuestionResponse",
    "QuestionPreviewRequest",
    "QuestionPreviewResponse",
    "PatternAnalysisRequest",
    "PatternAnalysisResponse",
]
