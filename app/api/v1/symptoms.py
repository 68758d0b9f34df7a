"""
Symptom pattern endpoints.
"""

from fastapi import APIRouter, HTTPException, Request, status

from app.config import get_settings
from app.core.logging import get_logger
from app.core.rate_limit import get_rate_limit_string, limiter
from app.schemas.appointment import PatternAnalysisRequest, PatternAnalysisResponse
from app.services.pattern_analyzer import get_pattern_analyzer, resolve_now

logger = get_logger(__name__)

router = APIRouter(prefix="/symptoms", tags=["symptoms"])


@router.post(
    "/patterns",
    response_model=PatternAnalysisResponse,
    summary="Analyze Symptom Patterns",
    description="""
    Summarize a symptom history: per-type frequency and severity trends
    over a trailing window, plus the most common triggers overall.
    """
)
@limiter.limit(get_rate_limit_string())
async def analyze_patterns(
    request: Request,
    payload: PatternAnalysisRequest
) -> PatternAnalysisResponse:
    """Run frequency, trend and trigger analysis over the posted logs."""
    settings = get_settings()

    if len(payload.symptom_logs) > settings.MAX_SYMPTOM_LOGS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Maximum {settings.MAX_SYMPTOM_LOGS} symptom logs can be analyzed at once"
        )

    try:
        days = payload.days_to_analyze or settings.DEFAULT_ANALYSIS_DAYS
        now = resolve_now(payload.reference_time)

        analyzer = await get_pattern_analyzer()
        result = PatternAnalysisResponse(
            frequencies=analyzer.analyze_frequency(payload.symptom_logs, days, now),
            trends=analyzer.analyze_trends(payload.symptom_logs, days, now),
            triggers=analyzer.analyze_common_triggers(payload.symptom_logs),
            window_days=days
        )

        logger.info(
            "Pattern analysis complete",
            extra={
                "symptom_types": len(result.frequencies),
                "trends": len(result.trends),
                "triggers": len(result.triggers),
            }
        )
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Pattern analysis failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze symptom patterns"
        )
