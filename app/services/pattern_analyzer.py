"""
Symptom Pattern Analyzer Service

Frequency, severity-trend and trigger analysis over a patient's symptom logs.
Every method is a pure function of its arguments: the same records and the
same reference instant always produce the same summaries.
"""

import math
import re
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

import numpy as np

from app.core.logging import get_logger
from app.schemas.symptom import (
    SeverityTrend,
    SymptomFrequency,
    SymptomRecord,
    TrendDirection,
    TriggerFrequency,
)

logger = get_logger(__name__)


# Severity points between half averages before a trend counts as a change
TREND_THRESHOLD = 1.0

TOP_TRIGGER_LIMIT = 5

TRIGGER_SEPARATOR = re.compile(r"[,;]")


def round_half_up(value: float) -> float:
    """Round to one decimal place, with halves going towards +infinity."""
    return math.floor(value * 10 + 0.5) / 10


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return the reference instant, defaulting to the current time."""
    if now is None:
        return datetime.now(timezone.utc)
    return as_utc(now)


def _mean_severity(records: Sequence[SymptomRecord]) -> float:
    return round_half_up(float(np.mean([record.severity for record in records])))


class SymptomPatternAnalyzer:
    """
    Pattern recognition over symptom logs.

    Frequency and trend analysis look at a trailing window ending at `now`;
    trigger analysis always uses the full history.
    """

    def analyze_frequency(
        self,
        records: Iterable[SymptomRecord],
        window_days: int,
        now: Optional[datetime] = None
    ) -> list[SymptomFrequency]:
        """
        Count occurrences of each symptom type inside the window.

        Symptom types are matched case-insensitively; the label of the first
        record seen for a type is the one reported.

        Args:
            records: Symptom logs in any order.
            window_days: Length of the trailing window in days.
            now: End of the window. Defaults to the current time.

        Returns:
            Frequencies sorted by count, most frequent first. Equal counts
            keep the order in which the types were first seen.
        """
        groups = self._group_in_window(records, window_days, now)

        frequencies = [self._summarize_group(group) for group in groups.values()]
        frequencies = sorted(frequencies, key=lambda f: f.count, reverse=True)

        logger.debug(
            "Frequency analysis complete",
            extra={"symptom_types": len(frequencies), "window_days": window_days}
        )
        return frequencies

    def analyze_trends(
        self,
        records: Iterable[SymptomRecord],
        window_days: int,
        now: Optional[datetime] = None
    ) -> list[SeverityTrend]:
        """
        Compare early and late severity for each recurring symptom type.

        Types with a single occurrence in the window are skipped. Output
        follows the same most-frequent-first order as `analyze_frequency`.
        """
        groups = self._group_in_window(records, window_days, now)

        trends = [
            self._classify_trend(group)
            for group in sorted(groups.values(), key=len, reverse=True)
            if len(group) >= 2
        ]

        logger.debug(
            "Trend analysis complete",
            extra={"trends": len(trends), "window_days": window_days}
        )
        return trends

    def analyze_common_triggers(
        self,
        records: Iterable[SymptomRecord],
        limit: int = TOP_TRIGGER_LIMIT
    ) -> list[TriggerFrequency]:
        """
        Tally reported triggers across the whole history.

        A record's trigger text is split on commas and semicolons; fragments
        are lowercased and trimmed, and empty ones are dropped.

        Args:
            records: Symptom logs in any order.
            limit: Maximum number of triggers returned.

        Returns:
            Most frequent triggers first, ties in first-seen order.
        """
        tally: Counter[str] = Counter()

        for record in records:
            if not record.triggers:
                continue
            for fragment in TRIGGER_SEPARATOR.split(record.triggers):
                trigger = fragment.lower().strip()
                if trigger:
                    tally[trigger] += 1

        return [
            TriggerFrequency(trigger=trigger, count=count)
            for trigger, count in tally.most_common()[:limit]
        ]

    def _group_in_window(
        self,
        records: Iterable[SymptomRecord],
        window_days: int,
        now: Optional[datetime]
    ) -> dict[str, list[SymptomRecord]]:
        """Group in-window records by lowercased symptom type, first-seen order."""
        cutoff = resolve_now(now) - timedelta(days=window_days)

        groups: dict[str, list[SymptomRecord]] = {}
        for record in records:
            if as_utc(record.logged_at) < cutoff:
                continue
            groups.setdefault(record.symptom_type.lower(), []).append(record)

        return groups

    def _summarize_group(self, group: list[SymptomRecord]) -> SymptomFrequency:
        timestamps = [as_utc(record.logged_at) for record in group]
        return SymptomFrequency(
            symptom_type=group[0].symptom_type,
            count=len(group),
            avg_severity=_mean_severity(group),
            first_occurrence=min(timestamps),
            last_occurrence=max(timestamps),
        )

    def _classify_trend(self, group: list[SymptomRecord]) -> SeverityTrend:
        """Split occurrences chronologically at n // 2 and compare the halves."""
        chronological = sorted(group, key=lambda record: as_utc(record.logged_at))
        midpoint = len(chronological) // 2

        start_avg = _mean_severity(chronological[:midpoint])
        end_avg = _mean_severity(chronological[midpoint:])
        change = round_half_up(end_avg - start_avg)

        if change > TREND_THRESHOLD:
            trend = TrendDirection.INCREASING
        elif change < -TREND_THRESHOLD:
            trend = TrendDirection.DECREASING
        else:
            trend = TrendDirection.STABLE

        return SeverityTrend(
            symptom_type=group[0].symptom_type,
            trend=trend,
            start_avg=start_avg,
            end_avg=end_avg,
            change=change,
        )


# Singleton instance
_analyzer_instance: Optional[SymptomPatternAnalyzer] = None


async def get_pattern_analyzer() -> SymptomPatternAnalyzer:
    """Get or create SymptomPatternAnalyzer instance."""
    global _analyzer_instance
    if _analyzer_instance is None:
        _analyzer_instance = SymptomPatternAnalyzer()
    return _analyzer_instance
