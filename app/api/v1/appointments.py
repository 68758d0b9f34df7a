"""
Appointment Preparation API Endpoints

Question generation for upcoming doctor visits, built from the patient's
symptom history and the reason for the visit.
"""

from fastapi import APIRouter, HTTPException, Request, status
from prometheus_client import Counter

from app.config import get_settings
from app.core.logging import get_logger
from app.core.rate_limit import get_rate_limit_string, limiter
from app.schemas.appointment import (
    QuestionPreviewRequest,
    QuestionPreviewResponse,
    QuestionRequest,
    QuestionResponse,
)
from app.services.pattern_analyzer import resolve_now
from app.services.question_generator import (
    get_question_generator,
    select_logs_for_appointment,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])

QUESTION_SETS_GENERATED = Counter(
    "appointment_question_sets_total",
    "Appointment question sets generated"
)
QUESTIONS_GENERATED = Counter(
    "appointment_questions_total",
    "Individual appointment questions generated"
)


@router.post(
    "/questions",
    response_model=QuestionResponse,
    summary="Generate Appointment Questions",
    description="""
    Generate up to 10 questions to ask at an upcoming appointment.

    Features:
    - Frequent symptom detection over a trailing window
    - Severity escalation and improvement detection
    - Common trigger extraction across the full history
    - Visit-specific question from the reason for the appointment

    When an appointment date is supplied, only logs since the previous
    appointment (or the analysis window) up to the appointment are used.
    """
)
@limiter.limit(get_rate_limit_string())
async def generate_questions(
    request: Request,
    payload: QuestionRequest
) -> QuestionResponse:
    """
    Build the ordered question list for one appointment.

    Args:
        request: Incoming request, used for rate limiting.
        payload: Symptom history and appointment context.

    Returns:
        Questions, a short preview, and the amount of data analyzed.
    """
    settings = get_settings()

    if len(payload.symptom_logs) > settings.MAX_SYMPTOM_LOGS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Maximum {settings.MAX_SYMPTOM_LOGS} symptom logs can be analyzed at once"
        )

    try:
        days = payload.days_to_analyze or settings.DEFAULT_ANALYSIS_DAYS
        logs = payload.symptom_logs
        reference_time = payload.reference_time or payload.appointment_date

        if payload.appointment_date is not None or payload.since is not None:
            logs = select_logs_for_appointment(
                logs,
                payload.appointment_date or resolve_now(reference_time),
                since=payload.since,
                default_days=days
            )

        logger.info(
            "Question generation requested",
            extra={"symptom_logs": len(logs), "days_to_analyze": days}
        )

        generator = await get_question_generator()
        questions = generator.generate_appointment_questions(
            payload.appointment_symptoms,
            logs,
            days_to_analyze=days,
            now=reference_time
        )

        QUESTION_SETS_GENERATED.inc()
        QUESTIONS_GENERATED.inc(len(questions))

        return QuestionResponse(
            questions=questions,
            preview=generator.get_question_preview(questions),
            symptoms_analyzed=len(logs),
            days_analyzed=days
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Question generation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate appointment questions"
        )


@router.post(
    "/questions/preview",
    response_model=QuestionPreviewResponse,
    summary="Preview Appointment Questions"
)
@limiter.limit(get_rate_limit_string())
async def preview_questions(
    request: Request,
    payload: QuestionPreviewRequest
) -> QuestionPreviewResponse:
    """Return the first few questions of a saved question list."""
    generator = await get_question_generator()
    return QuestionPreviewResponse(preview=generator.get_question_preview(payload.questions))
