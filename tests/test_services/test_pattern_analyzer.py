"""
Tests for symptom pattern analysis.
"""

from datetime import datetime, timedelta

import pytest

from app.schemas.symptom import SymptomRecord, TrendDirection
from app.services.pattern_analyzer import SymptomPatternAnalyzer, round_half_up


@pytest.fixture
def analyzer():
    """Create pattern analyzer instance."""
    return SymptomPatternAnalyzer()


# ============================================================================
# ROUNDING
# ============================================================================

@pytest.mark.parametrize("value, expected", [
    (4.0, 4.0),
    (6.666666, 6.7),
    (1.75, 1.8),
    (2.25, 2.3),
    (-0.25, -0.2),
    (-2.66, -2.7),
])
def test_round_half_up(value, expected):
    """Test one-decimal rounding sends halves upwards."""
    assert round_half_up(value) == pytest.approx(expected)


# ============================================================================
# FREQUENCY
# ============================================================================

def test_frequency_groups_case_insensitively(analyzer, make_record, now):
    """Test symptom types differing only in case share one group."""
    records = [
        make_record("Headache", 2, days_ago=3),
        make_record("headache", 4, days_ago=2),
        make_record("HEADACHE", 6, days_ago=1),
    ]

    frequencies = analyzer.analyze_frequency(records, 30, now)

    assert len(frequencies) == 1
    assert frequencies[0].symptom_type == "Headache"
    assert frequencies[0].count == 3
    assert frequencies[0].avg_severity == 4.0


def test_frequency_first_and_last_occurrence(analyzer, make_record, now):
    """Test occurrence bounds come from the timestamps, not input order."""
    records = [
        make_record("Nausea", 5, days_ago=5),
        make_record("Nausea", 5, days_ago=10),
        make_record("Nausea", 5, days_ago=1),
    ]

    frequency = analyzer.analyze_frequency(records, 30, now)[0]

    assert frequency.first_occurrence == now - timedelta(days=10)
    assert frequency.last_occurrence == now - timedelta(days=1)


def test_frequency_rounds_average_severity(analyzer, make_record, now):
    """Test average severity is rounded to one decimal."""
    records = [make_record("Fatigue", s) for s in [1, 2, 2, 2]]

    frequencies = analyzer.analyze_frequency(records, 30, now)

    assert frequencies[0].avg_severity == 1.8


def test_frequency_respects_window(analyzer, make_record, now):
    """Test records older than the window are ignored."""
    records = [
        make_record("Headache", 5, days_ago=31),
        make_record("Headache", 5, days_ago=30),
        make_record("Headache", 5, days_ago=29),
        make_record("Dizziness", 5, days_ago=45),
    ]

    frequencies = analyzer.analyze_frequency(records, 30, now)

    assert len(frequencies) == 1
    assert frequencies[0].count == 2


def test_frequency_sorted_by_count_with_stable_ties(analyzer, make_record, now):
    """Test most frequent first, ties in first-seen order."""
    records = [
        make_record("Nausea", 3),
        make_record("Fatigue", 3),
        make_record("Headache", 3),
        make_record("Headache", 3),
        make_record("Rash", 3),
    ]

    frequencies = analyzer.analyze_frequency(records, 30, now)

    assert [f.symptom_type for f in frequencies] == ["Headache", "Nausea", "Fatigue", "Rash"]


def test_frequency_empty_history(analyzer, now):
    """Test no records yields no frequencies."""
    assert analyzer.analyze_frequency([], 30, now) == []


def test_frequency_does_not_mutate_input(analyzer, make_record, now):
    """Test analysis leaves the caller's list untouched."""
    records = [make_record("Cough", 4, days_ago=1), make_record("Cough", 6, days_ago=5)]
    snapshot = list(records)

    analyzer.analyze_frequency(records, 30, now)
    analyzer.analyze_trends(records, 30, now)

    assert records == snapshot


def test_frequency_tolerates_out_of_range_severity(analyzer, now):
    """Test averaging does not validate severity bounds."""
    record = SymptomRecord.model_construct(
        symptom_type="Pain",
        severity=42,
        triggers=None,
        notes=None,
        body_part=None,
        logged_at=now,
    )

    frequencies = analyzer.analyze_frequency([record], 30, now)

    assert frequencies[0].avg_severity == 42.0


def test_frequency_accepts_naive_timestamps(analyzer, now):
    """Test naive timestamps are compared as UTC."""
    record = SymptomRecord.model_construct(
        symptom_type="Pain",
        severity=3,
        triggers=None,
        notes=None,
        body_part=None,
        logged_at=datetime(2024, 2, 28, 9, 0),
    )

    frequencies = analyzer.analyze_frequency([record], 30, now)

    assert frequencies[0].count == 1


# ============================================================================
# TRENDS
# ============================================================================

def test_trend_requires_two_occurrences(analyzer, make_record, now):
    """Test a single occurrence never produces a trend."""
    records = [
        make_record("Headache", 2, days_ago=3),
        make_record("Headache", 8, days_ago=1),
        make_record("Nausea", 9, days_ago=2),
    ]

    trends = analyzer.analyze_trends(records, 30, now)

    assert [t.symptom_type for t in trends] == ["Headache"]


def test_trend_odd_count_extra_record_in_second_half(analyzer, make_record, now):
    """Test [2, 2, 8] splits as [2] and [2, 8]."""
    records = [
        make_record("Headache", 2, days_ago=3),
        make_record("Headache", 2, days_ago=2),
        make_record("Headache", 8, days_ago=1),
    ]

    trend = analyzer.analyze_trends(records, 30, now)[0]

    assert trend.start_avg == 2.0
    assert trend.end_avg == 5.0
    assert trend.change == 3.0
    assert trend.trend == TrendDirection.INCREASING


def test_trend_change_of_exactly_one_is_stable(analyzer, make_record, now):
    """Test the classification threshold is exclusive."""
    records = [
        make_record("Back Pain", 3, days_ago=2),
        make_record("Back Pain", 4, days_ago=1),
    ]

    trend = analyzer.analyze_trends(records, 30, now)[0]

    assert trend.change == 1.0
    assert trend.trend == TrendDirection.STABLE


def test_trend_decreasing(analyzer, make_record, now):
    """Test falling severity is classified as decreasing."""
    records = [
        make_record("Migraine", 8, days_ago=3),
        make_record("Migraine", 8, days_ago=2),
        make_record("Migraine", 2, days_ago=1),
    ]

    trend = analyzer.analyze_trends(records, 30, now)[0]

    assert trend.start_avg == 8.0
    assert trend.end_avg == 5.0
    assert trend.change == -3.0
    assert trend.trend == TrendDirection.DECREASING


def test_trend_sorts_chronologically(analyzer, make_record, now):
    """Test halves are taken in time order regardless of input order."""
    records = [
        make_record("Headache", 8, days_ago=1),
        make_record("Headache", 2, days_ago=3),
        make_record("Headache", 2, days_ago=2),
    ]

    trend = analyzer.analyze_trends(records, 30, now)[0]

    assert trend.trend == TrendDirection.INCREASING
    assert trend.start_avg == 2.0


def test_trend_change_uses_rounded_averages(analyzer, make_record, now):
    """Test change equals the difference of the displayed averages."""
    severities = [4, 4, 4, 8, 8]
    records = [
        make_record("Headache", s, days_ago=10 - i)
        for i, s in enumerate(severities)
    ]

    trend = analyzer.analyze_trends(records, 30, now)[0]

    assert trend.start_avg == 4.0
    assert trend.end_avg == 6.7
    assert trend.change == 2.7


def test_trend_order_follows_frequency(analyzer, make_record, now):
    """Test trends are listed most frequent symptom first."""
    records = [
        make_record("Nausea", 5, days_ago=4),
        make_record("Nausea", 5, days_ago=3),
        make_record("Fatigue", 5, days_ago=4),
        make_record("Fatigue", 5, days_ago=3),
        make_record("Fatigue", 5, days_ago=2),
    ]

    trends = analyzer.analyze_trends(records, 30, now)

    assert [t.symptom_type for t in trends] == ["Fatigue", "Nausea"]


def test_trend_respects_window(analyzer, make_record, now):
    """Test out-of-window occurrences do not count towards a trend."""
    records = [
        make_record("Headache", 9, days_ago=60),
        make_record("Headache", 2, days_ago=1),
    ]

    assert analyzer.analyze_trends(records, 30, now) == []


# ============================================================================
# TRIGGERS
# ============================================================================

def test_trigger_parsing(analyzer, make_record):
    """Test commas and semicolons both separate triggers."""
    records = [make_record("Headache", 5, triggers="Stress, Bright Lights; loud noise")]

    triggers = analyzer.analyze_common_triggers(records)

    assert [t.trigger for t in triggers] == ["stress", "bright lights", "loud noise"]


def test_trigger_tally_across_records(analyzer, make_record):
    """Test counts accumulate across the whole history."""
    records = [
        make_record("Headache", 5, triggers="caffeine; Stress"),
        make_record("Nausea", 5, triggers="stress"),
        make_record("Headache", 5, days_ago=400, triggers=" STRESS ,caffeine"),
        make_record("Fatigue", 5, triggers=None),
    ]

    triggers = analyzer.analyze_common_triggers(records)

    assert [(t.trigger, t.count) for t in triggers] == [("stress", 3), ("caffeine", 2)]


def test_trigger_empty_fragments_dropped(analyzer, make_record):
    """Test consecutive or trailing separators leave no empty triggers."""
    records = [make_record("Headache", 5, triggers="stress,,; ;heat;")]

    triggers = analyzer.analyze_common_triggers(records)

    assert [t.trigger for t in triggers] == ["stress", "heat"]


def test_trigger_top_five_with_stable_ties(analyzer, make_record):
    """Test at most five triggers, ties in first-seen order."""
    records = [
        make_record("Headache", 5, triggers="a, b, c, d, e, f, g"),
        make_record("Headache", 5, triggers="g"),
    ]

    triggers = analyzer.analyze_common_triggers(records)

    assert [t.trigger for t in triggers] == ["g", "a", "b", "c", "d"]


def test_trigger_no_data(analyzer, make_record):
    """Test records without triggers yield an empty list."""
    records = [make_record("Headache", 5), make_record("Nausea", 5, triggers="")]

    assert analyzer.analyze_common_triggers(records) == []
