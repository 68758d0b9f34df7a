"""Services for the Health Log Question Engine."""

from app.services.pattern_analyzer import SymptomPatternAnalyzer, get_pattern_analyzer
from app.services.question_generator import (
    QuestionGenerator,
    get_question_generator,
    select_logs_for_appointment,
)

__all__ = [
    "SymptomPatternAnalyzer",
    "get_pattern_analyzer",
    "QuestionGenerator",
    "get_question_generator",
    "select_logs_for_appointment",
]
