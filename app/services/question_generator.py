"""
Appointment Question Generator Service

Template-based composer that turns symptom patterns and the reason for an
upcoming visit into a short, ordered list of questions for the doctor.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from app.core.logging import get_logger
from app.schemas.symptom import SymptomRecord, TrendDirection
from app.services.pattern_analyzer import (
    SymptomPatternAnalyzer,
    as_utc,
    resolve_now,
)

logger = get_logger(__name__)


# ============================================================================
# TEMPLATES AND LIMITS
# ============================================================================

OPENING_QUESTIONS = (
    "What are my current vital signs and how do they compare to my last visit?",
    "Are there any test results or screenings I should review?",
)

CLOSING_QUESTIONS = (
    "What preventive care or screenings should I prioritize this year?",
    "Are there any lifestyle changes you recommend based on my health profile?",
)

MAX_QUESTIONS = 10
PREVIEW_SIZE = 3
DEFAULT_ANALYSIS_DAYS = 30

FREQUENT_SYMPTOM_LIMIT = 2
FREQUENT_SYMPTOM_MIN_COUNT = 3

# Stricter than the classification threshold: only strong trends get a question
STRONG_TREND_CHANGE = 1.5

TRIGGER_MENTION_LIMIT = 2


def _format_number(value: float) -> str:
    """Render 4.0 as "4" and 6.7 as "6.7"."""
    return f"{value:g}"


def _timeframe(days: int) -> str:
    if days == 30:
        return "past month"
    return f"past {days} days"


def select_logs_for_appointment(
    records: Iterable[SymptomRecord],
    appointment_date: datetime,
    since: Optional[datetime] = None,
    default_days: int = DEFAULT_ANALYSIS_DAYS
) -> list[SymptomRecord]:
    """
    Keep the logs recorded between the previous appointment and this one.

    Without a previous appointment the range starts `default_days` before the
    appointment. Both ends are inclusive and input order is preserved.
    """
    end = as_utc(appointment_date)
    start = as_utc(since) if since is not None else end - timedelta(days=default_days)

    return [
        record for record in records
        if start <= as_utc(record.logged_at) <= end
    ]


class QuestionGenerator:
    """
    Composes appointment questions in a fixed priority order.

    Openers come first, then frequent symptoms, strong severity trends,
    common triggers, the visit's own symptoms and finally the closers. The
    list is cut at MAX_QUESTIONS, so low-priority questions can drop off.
    """

    def __init__(self, analyzer: Optional[SymptomPatternAnalyzer] = None):
        self._analyzer = analyzer or SymptomPatternAnalyzer()

    def generate_appointment_questions(
        self,
        appointment_symptoms: Optional[str],
        symptom_logs: Sequence[SymptomRecord],
        days_to_analyze: int = DEFAULT_ANALYSIS_DAYS,
        now: Optional[datetime] = None
    ) -> list[str]:
        """
        Generate questions for an upcoming appointment.

        Args:
            appointment_symptoms: Free-text reason for this visit, if any.
            symptom_logs: The patient's symptom history.
            days_to_analyze: Trailing window for frequency and trend analysis.
            now: End of the analysis window. Defaults to the current time.

        Returns:
            Between 2 and MAX_QUESTIONS questions.
        """
        now = resolve_now(now)
        questions: list[str] = list(OPENING_QUESTIONS)

        questions.extend(self._frequency_questions(symptom_logs, days_to_analyze, now))
        questions.extend(self._trend_questions(symptom_logs, days_to_analyze, now))
        questions.extend(self._trigger_questions(symptom_logs))
        questions.extend(self._appointment_questions(appointment_symptoms))

        questions.extend(CLOSING_QUESTIONS)

        if len(questions) > MAX_QUESTIONS:
            logger.debug(
                "Truncating generated questions",
                extra={"generated": len(questions), "kept": MAX_QUESTIONS}
            )

        return questions[:MAX_QUESTIONS]

    def get_question_preview(
        self,
        questions: Sequence[str],
        size: int = PREVIEW_SIZE
    ) -> list[str]:
        """Return the first few questions for compact display."""
        return list(questions[:size])

    def _frequency_questions(
        self,
        symptom_logs: Sequence[SymptomRecord],
        days: int,
        now: datetime
    ) -> list[str]:
        frequencies = self._analyzer.analyze_frequency(symptom_logs, days, now)

        return [
            f"I've had {frequency.symptom_type.lower()} {frequency.count} times in the "
            f"{_timeframe(days)}, with an average severity of "
            f"{_format_number(frequency.avg_severity)}/10. "
            "What could be causing this, and should we look into it further?"
            for frequency in frequencies[:FREQUENT_SYMPTOM_LIMIT]
            if frequency.count >= FREQUENT_SYMPTOM_MIN_COUNT
        ]

    def _trend_questions(
        self,
        symptom_logs: Sequence[SymptomRecord],
        days: int,
        now: datetime
    ) -> list[str]:
        questions = []

        for trend in self._analyzer.analyze_trends(symptom_logs, days, now):
            symptom = trend.symptom_type.lower()
            start = _format_number(trend.start_avg)
            end = _format_number(trend.end_avg)

            if trend.trend == TrendDirection.INCREASING and trend.change >= STRONG_TREND_CHANGE:
                questions.append(
                    f"My {symptom} seems to be getting worse, with average severity rising "
                    f"from {start}/10 to {end}/10. Should I be concerned about this escalation?"
                )
            elif trend.trend == TrendDirection.DECREASING and trend.change <= -STRONG_TREND_CHANGE:
                questions.append(
                    f"My {symptom} has been improving, with average severity dropping "
                    f"from {start}/10 to {end}/10. Is my current treatment working, "
                    "and should I keep it up?"
                )

        return questions

    def _trigger_questions(self, symptom_logs: Sequence[SymptomRecord]) -> list[str]:
        triggers = self._analyzer.analyze_common_triggers(symptom_logs)
        if not triggers:
            return []

        mentioned = triggers[:TRIGGER_MENTION_LIMIT]
        named = " and ".join(t.trigger for t in mentioned)
        verb = "comes" if len(mentioned) == 1 else "come"
        return [
            f"I've noticed {named} often {verb} before my symptoms. "
            "How can I better manage or avoid these triggers?"
        ]

    def _appointment_questions(self, appointment_symptoms: Optional[str]) -> list[str]:
        if appointment_symptoms is None:
            return []

        text = appointment_symptoms.strip().lower()
        if not text:
            return []

        return [
            f"I've been experiencing {text}. "
            "What treatment or lifestyle changes would you recommend for this?"
        ]


# Singleton instance
_generator_instance: Optional[QuestionGenerator] = None


async def get_question_generator() -> QuestionGenerator:
    """Get or create QuestionGenerator instance."""
    global _generator_instance
    if _generator_instance is None:
        _generator_instance = QuestionGenerator()
    return _generator_instance
