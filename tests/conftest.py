"""
Pytest fixtures for Health Log Question Engine tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

# Set environment variables before imports
import os
os.environ["DEBUG"] = "true"
os.environ["RATE_LIMIT"] = "1000/minute"

from app.main import app
from app.schemas.symptom import SymptomRecord


NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def test_client():
    """Create synchronous test client."""
    return TestClient(app)


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant for window calculations."""
    return NOW


@pytest.fixture
def make_record() -> Callable[..., SymptomRecord]:
    """Factory for symptom records logged a number of days before NOW."""

    def _make(
        symptom_type: str,
        severity: int,
        days_ago: float = 1,
        triggers: Optional[str] = None,
        notes: Optional[str] = None
    ) -> SymptomRecord:
        return SymptomRecord(
            symptom_type=symptom_type,
            severity=severity,
            triggers=triggers,
            notes=notes,
            logged_at=NOW - timedelta(days=days_ago)
        )

    return _make


@pytest.fixture
def headache_history(make_record) -> list[SymptomRecord]:
    """Five headaches in the past month, getting worse over time."""
    return [
        make_record("Headache", severity, days_ago=days_ago)
        for severity, days_ago in zip([4, 4, 4, 8, 8], [20, 16, 12, 8, 4])
    ]
